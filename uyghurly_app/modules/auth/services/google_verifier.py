"""
Google Token Verifier - checks a Google ID token against Google's
``tokeninfo`` endpoint and returns the identity claims.
"""
import logging

import requests

from ..errors import GOOGLE, INVALID_CREDENTIAL, NETWORK_REQUEST_FAILED, AuthError

logger = logging.getLogger(__name__)


class GoogleTokenVerifier:
    def __init__(self, client_id, tokeninfo_url, timeout=10, session=None):
        self.client_id = client_id
        self.tokeninfo_url = tokeninfo_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def verify(self, id_token):
        """
        Return ``{'sub', 'email', 'name'}`` for a valid token.

        Raises:
            AuthError: network failure, rejected token, wrong audience or
                unverified email.
        """
        try:
            response = self.session.get(
                self.tokeninfo_url,
                params={'id_token': id_token},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Google token verification request failed: %s", exc)
            raise AuthError(NETWORK_REQUEST_FAILED, GOOGLE) from exc

        if response.status_code != 200:
            logger.warning("Google rejected ID token (HTTP %s)", response.status_code)
            raise AuthError(INVALID_CREDENTIAL, GOOGLE)

        try:
            claims = response.json()
        except ValueError as exc:
            raise AuthError(INVALID_CREDENTIAL, GOOGLE) from exc

        if self.client_id and claims.get('aud') != self.client_id:
            logger.warning("Google ID token issued for another client: %s", claims.get('aud'))
            raise AuthError(INVALID_CREDENTIAL, GOOGLE)

        email = claims.get('email')
        if not email or str(claims.get('email_verified')).lower() != 'true':
            raise AuthError(INVALID_CREDENTIAL, GOOGLE)

        return {
            'sub': claims.get('sub'),
            'email': email,
            'name': claims.get('name') or '',
        }
