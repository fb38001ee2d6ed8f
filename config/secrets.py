"""
Secret resolution for settings.

Secrets come from one backend, chosen with ``SECRETS_BACKEND``:

- ``env`` (default): environment variables and ``.env`` via python-decouple
- ``gcp``: Google Secret Manager, for deployments that keep credentials
  out of the environment. Needs the ``gcp`` extra
  (``google-cloud-secret-manager``).

Values are cached per (name, version) for ``SECRETS_CACHE_SECONDS``
(default 300). The resolver is built once in settings and exposed as
``settings.SECRETS``::

    from django.conf import settings

    client_id = settings.SECRETS.get('GOOGLE_CLIENT_ID')
"""

import logging
import threading
import time

from decouple import config, UndefinedValueError


logger = logging.getLogger(__name__)

DEFAULT_CACHE_SECONDS = 300

_MISSING = object()


class SecretError(Exception):
    """Base exception for secret lookups."""
    pass


class SecretNotFoundError(SecretError):
    """Raised when a secret does not exist in the backend."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Secret {name} not found")


class MissingSecretsError(SecretError):
    """Raised by SecretResolver.validate() listing every missing secret."""

    def __init__(self, names):
        self.names = list(names)
        super().__init__(f"Missing required secrets: {', '.join(self.names)}")


class EnvironmentSecretBackend:
    """Read secrets from the environment (and .env) through python-decouple."""

    def fetch(self, name, version='latest'):
        try:
            value = config(name)
        except UndefinedValueError:
            raise SecretNotFoundError(name)
        if value == '':
            raise SecretNotFoundError(name)
        return value


class GoogleSecretManagerBackend:
    """Read secrets from Google Secret Manager."""

    def __init__(self, project_id, client=None):
        if not project_id:
            raise SecretError("GOOGLE_CLOUD_PROJECT_ID is required for the gcp secrets backend")
        self.project_id = project_id
        self._client = client

    @property
    def client(self):
        if self._client is None:
            from google.cloud import secretmanager
            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def fetch(self, name, version='latest'):
        from google.api_core.exceptions import NotFound

        path = f"projects/{self.project_id}/secrets/{name}/versions/{version}"
        try:
            response = self.client.access_secret_version(request={'name': path})
        except NotFound:
            raise SecretNotFoundError(name)
        except Exception as e:
            raise SecretError(f"Failed to access secret {name}: {e}") from e

        data = response.payload.data
        if not data:
            raise SecretNotFoundError(name)
        return data.decode('utf-8')


class SecretResolver:
    """
    Look up secrets through a backend, with a time-based cache.

    Args:
        backend: Object with ``fetch(name, version)``.
        cache_seconds: How long a fetched value stays cached. 0 disables
            caching.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(self, backend, cache_seconds=DEFAULT_CACHE_SECONDS, clock=time.monotonic):
        self.backend = backend
        self.cache_seconds = cache_seconds
        self._clock = clock
        self._cache = {}
        self._lock = threading.Lock()

    def get(self, name, default=_MISSING, version='latest'):
        """
        Return a secret value.

        Raises:
            SecretNotFoundError: If the secret is missing and no default
                was given.
            SecretError: If the backend fails.
        """
        key = (name, version)
        now = self._clock()

        with self._lock:
            cached = self._cache.get(key)
            if cached is not None and now - cached[1] < self.cache_seconds:
                return cached[0]

        logger.debug("Secret cache miss for %s", name)
        try:
            value = self.backend.fetch(name, version)
        except SecretNotFoundError:
            if default is _MISSING:
                raise
            return default
        except SecretError:
            logger.error("Secret backend failed for %s", name)
            raise

        with self._lock:
            self._cache[key] = (value, now)
        return value

    def get_many(self, names):
        """Return a dict of name -> value. Fails on the first missing secret."""
        return {name: self.get(name) for name in names}

    def clear_cache(self):
        with self._lock:
            self._cache.clear()

    def validate(self, required):
        """
        Check that every required secret resolves.

        Raises:
            MissingSecretsError: Listing all missing names, not just the first.
        """
        missing = []
        for name in required:
            try:
                self.get(name)
            except SecretNotFoundError:
                missing.append(name)
        if missing:
            raise MissingSecretsError(missing)


def build_secret_resolver(backend=None, project_id=None, cache_seconds=None):
    """Build the resolver from SECRETS_BACKEND and related settings."""
    if backend is None:
        backend = config('SECRETS_BACKEND', default='env')
    if cache_seconds is None:
        cache_seconds = config('SECRETS_CACHE_SECONDS', default=DEFAULT_CACHE_SECONDS, cast=int)

    if backend == 'env':
        return SecretResolver(EnvironmentSecretBackend(), cache_seconds=cache_seconds)
    if backend == 'gcp':
        if project_id is None:
            project_id = config('GOOGLE_CLOUD_PROJECT_ID', default='')
        return SecretResolver(GoogleSecretManagerBackend(project_id), cache_seconds=cache_seconds)

    raise SecretError(f"Unknown SECRETS_BACKEND: {backend!r}. Use 'env' or 'gcp'.")
