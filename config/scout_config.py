"""
Centralized Scout Dashboard Configuration
Settings for the Firestore-backed athlete telemetry dashboard
"""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


@dataclass
class ScoutConfig:
    """Centralized configuration for the scout dashboard"""

    # Firebase project
    FIREBASE_API_KEY: str = ''
    FIREBASE_PROJECT_ID: str = ''
    SERVICE_TOKEN: Optional[str] = None  # OAuth access token used by the seed script

    # Collections
    ATHLETES_COLLECTION: str = 'athletes'
    EVENTS_COLLECTION: str = 'jumpLogs'

    # Query limits
    FEED_LIMIT: int = 300
    ATHLETE_EVENT_LIMIT: int = 100
    LATEST_EVENT_WINDOW: int = 10
    PAGE_SIZE: int = 15
    LIST_PAGE_SIZE: int = 300

    # Refresh cadence (seconds) for snapshot polling
    REFRESH_SECONDS: int = 5

    # Requests
    REQUEST_TIMEOUT: int = 30
    MAX_RETRIES: int = 3
    RETRY_BACKOFF_FACTOR: float = 2.0

    # Directories
    DATA_DIR: str = 'data'
    LOG_DIR: str = 'logs'

    # Token Management
    TOKEN_REFRESH_BUFFER: int = 300  # Refresh 5 min before expiry

    # Logging
    LOG_LEVEL: str = 'INFO'
    LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    LOG_MAX_BYTES: int = 10485760  # 10MB
    LOG_BACKUP_COUNT: int = 5

    # Live demo
    DEMO_ATHLETE_ID: str = 'demo-user-001'

    @classmethod
    def from_env(cls, env_path: Optional[str] = None):
        """Load configuration from .env file"""
        env_locations = [
            env_path,
            '.env',
            'config/local_secrets/.env',
            '../config/local_secrets/.env',
        ]

        for loc in env_locations:
            if loc and os.path.exists(loc):
                load_dotenv(loc)
                break

        return cls(
            FIREBASE_API_KEY=os.getenv('FIREBASE_API_KEY', ''),
            FIREBASE_PROJECT_ID=os.getenv('FIREBASE_PROJECT_ID', ''),
            SERVICE_TOKEN=os.getenv('FIREBASE_SERVICE_TOKEN') or None,
            ATHLETES_COLLECTION=os.getenv('ATHLETES_COLLECTION', 'athletes'),
            EVENTS_COLLECTION=os.getenv('EVENTS_COLLECTION', 'jumpLogs'),
            REFRESH_SECONDS=int(os.getenv('REFRESH_SECONDS', '5')),
            DATA_DIR=os.getenv('SCOUT_DATA_DIR', 'data'),
            LOG_DIR=os.getenv('SCOUT_LOG_DIR', 'logs'),
            LOG_LEVEL=os.getenv('LOG_LEVEL', 'INFO').upper(),
            DEMO_ATHLETE_ID=os.getenv('DEMO_ATHLETE_ID', 'demo-user-001'),
        )

    @classmethod
    def from_streamlit_secrets(cls, secrets, fallback: Optional['ScoutConfig'] = None):
        """
        Overlay values from a Streamlit secrets mapping.

        Expects a ``[firebase]`` section with API_KEY / PROJECT_ID and
        optional DEMO_ATHLETE_ID. Anything missing keeps the fallback value.
        """
        base = fallback or cls()
        section = secrets.get('firebase') if hasattr(secrets, 'get') else None
        if not section:
            return base

        return cls(
            **{
                **base.__dict__,
                'FIREBASE_API_KEY': section.get('API_KEY', base.FIREBASE_API_KEY),
                'FIREBASE_PROJECT_ID': section.get('PROJECT_ID', base.FIREBASE_PROJECT_ID),
                'DEMO_ATHLETE_ID': section.get('DEMO_ATHLETE_ID', base.DEMO_ATHLETE_ID),
            }
        )

    @property
    def use_firestore(self) -> bool:
        """True when a Firestore project is configured; otherwise local snapshots are used."""
        return bool(self.FIREBASE_PROJECT_ID)

    def validate(self) -> bool:
        """Validate required configuration for talking to Firebase"""
        required = ['FIREBASE_API_KEY', 'FIREBASE_PROJECT_ID']
        missing = [f for f in required if not getattr(self, f)]

        if missing:
            raise ValueError(f"Missing required config: {', '.join(missing)}")

        return True

    def get_endpoint(self, service: str) -> str:
        """Generate endpoint URL for a service"""
        endpoints = {
            'firestore': (
                f'https://firestore.googleapis.com/v1/projects/{self.FIREBASE_PROJECT_ID}'
                '/databases/(default)/documents'
            ),
            'sign_in': 'https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword',
            'refresh': 'https://securetoken.googleapis.com/v1/token',
        }

        base_url = endpoints.get(service)
        if not base_url:
            raise ValueError(f"Unknown service: {service}")

        return base_url

    def local_snapshot_path(self, collection: str) -> str:
        """Path of the local JSON snapshot for a collection"""
        return os.path.join(self.DATA_DIR, f'{collection}.json')

    def ensure_directories(self):
        """Create required directories if they don't exist"""
        for d in [self.DATA_DIR, self.LOG_DIR]:
            os.makedirs(d, exist_ok=True)


if __name__ == "__main__":
    config = ScoutConfig.from_env()

    print(f"Project: {config.FIREBASE_PROJECT_ID or '(local snapshots)'}")
    print(f"Collections: {config.ATHLETES_COLLECTION}, {config.EVENTS_COLLECTION}")
    if config.use_firestore:
        print(f"Firestore: {config.get_endpoint('firestore')}")
