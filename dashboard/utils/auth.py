"""
Firebase Authentication (REST)
Scout Dashboard - e-mail / password sign-in gating the dashboard

Signs scouts in against the Identity Toolkit REST API and refreshes ID
tokens shortly before they expire. Provider error codes are mapped to the
messages shown on the login page.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import requests


ERROR_MESSAGES = {
    'EMAIL_NOT_FOUND': 'No account found with this email.',
    'USER_NOT_FOUND': 'No account found with this email.',
    'INVALID_PASSWORD': 'Incorrect password.',
    'INVALID_EMAIL': 'Invalid email address.',
    'TOO_MANY_ATTEMPTS_TRY_LATER': 'Too many attempts. Try again later.',
    'INVALID_LOGIN_CREDENTIALS': 'Invalid email or password.',
    'INVALID_CREDENTIAL': 'Invalid email or password.',
    'USER_DISABLED': 'This account has been disabled.',
}
DEFAULT_ERROR_MESSAGE = 'Login failed. Check your credentials.'


class AuthError(Exception):
    """Sign-in or token refresh failed"""

    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(message or friendly_message(code))
        self.code = code
        self.message = message or friendly_message(code)


def friendly_message(code: Optional[str]) -> str:
    if not code:
        return DEFAULT_ERROR_MESSAGE
    # Codes can carry a suffix, e.g. "TOO_MANY_ATTEMPTS_TRY_LATER : Access disabled..."
    key = code.split(':', 1)[0].strip().upper()
    return ERROR_MESSAGES.get(key, DEFAULT_ERROR_MESSAGE)


@dataclass
class AuthSession:
    """A signed-in scout"""
    uid: str
    email: str
    id_token: str
    refresh_token: str
    expires_at: datetime

    @property
    def display_name(self) -> str:
        return self.email.split('@')[0] if self.email else 'Scout'

    def needs_refresh(self, buffer_seconds: int = 300, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at - timedelta(seconds=buffer_seconds)


class FirebaseAuthClient:
    """Identity Toolkit sign-in + Secure Token refresh"""

    def __init__(self, config, logger: Optional[logging.Logger] = None,
                 session: Optional[requests.Session] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or requests.Session()

    def _post(self, service: str, **kwargs) -> dict:
        if not self.config.FIREBASE_API_KEY:
            raise AuthError('CONFIGURATION_NOT_FOUND', 'Authentication is not configured.')

        try:
            response = self.session.post(
                self.config.get_endpoint(service),
                params={'key': self.config.FIREBASE_API_KEY},
                timeout=self.config.REQUEST_TIMEOUT,
                **kwargs,
            )
        except requests.RequestException as e:
            self.logger.error(f"Auth request error: {e}")
            raise AuthError('NETWORK_ERROR', 'Could not reach the authentication service.') from e

        if response.status_code != 200:
            code = _error_code(response)
            self.logger.warning(f"Auth request rejected: {response.status_code} {code}")
            raise AuthError(code)

        return response.json()

    def sign_in(self, email: str, password: str, now: Optional[datetime] = None) -> AuthSession:
        email = (email or '').strip()
        if not email or not password:
            raise AuthError('INVALID_LOGIN_CREDENTIALS')

        data = self._post('sign_in', json={
            'email': email,
            'password': password,
            'returnSecureToken': True,
        })

        self.logger.info(f"Signed in {email}")
        return AuthSession(
            uid=data.get('localId', ''),
            email=data.get('email', email),
            id_token=data['idToken'],
            refresh_token=data.get('refreshToken', ''),
            expires_at=_expiry(data.get('expiresIn'), now),
        )

    def refresh(self, auth_session: AuthSession, now: Optional[datetime] = None) -> AuthSession:
        data = self._post('refresh', data={
            'grant_type': 'refresh_token',
            'refresh_token': auth_session.refresh_token,
        })

        self.logger.info(f"Refreshed token for {auth_session.email}")
        return AuthSession(
            uid=data.get('user_id', auth_session.uid),
            email=auth_session.email,
            id_token=data['id_token'],
            refresh_token=data.get('refresh_token', auth_session.refresh_token),
            expires_at=_expiry(data.get('expires_in'), now),
        )

    def ensure_fresh(self, auth_session: AuthSession, now: Optional[datetime] = None) -> AuthSession:
        """Refresh the session if it expires within the configured buffer"""
        if auth_session.needs_refresh(self.config.TOKEN_REFRESH_BUFFER, now):
            return self.refresh(auth_session, now)
        return auth_session


def _expiry(expires_in, now: Optional[datetime]) -> datetime:
    now = now or datetime.now(timezone.utc)
    try:
        seconds = int(expires_in)
    except (TypeError, ValueError):
        seconds = 3600
    return now + timedelta(seconds=seconds)


def _error_code(response: requests.Response) -> str:
    try:
        error = response.json().get('error', {})
    except ValueError:
        return ''
    if isinstance(error, dict):
        return str(error.get('message', ''))
    return str(error)
