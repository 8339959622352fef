"""
Project-wide configuration constants.

These values are the defaults for PipelineConfig. Deployments override
them through environment variables prefixed with ``BONDTRANS_`` (see
``PipelineConfig.from_env``), optionally loaded from a ``.env`` file by
the CLI.

Module Contents:
    APP_NAME: Application name for display purposes
    DEFAULT_BACKEND: Remote translator used when none is configured
    FTAPI_URL: Base URL of the free translate API used by the gateway
    MYMEMORY_URL: Base URL of the MyMemory translation API
    DEFAULT_TIMEOUT: HTTP timeout for a single remote call, in seconds
    DEFAULT_MAX_CONCURRENCY: Entities translated at once in a batch
    LANGUAGE_FIELD: Response field that records the payload language
    ENV_PREFIX: Prefix of the environment variables read by the pipeline
    USER_AGENT: User-Agent header sent by the HTTP backends
"""

from bondtrans import __version__

APP_NAME = "bondtrans"

DEFAULT_BACKEND = "ftapi"

FTAPI_URL = "https://ftapi.pythonanywhere.com"

MYMEMORY_URL = "https://api.mymemory.translated.net"

DEFAULT_TIMEOUT = 10.0

DEFAULT_MAX_CONCURRENCY = 8

LANGUAGE_FIELD = "lang"

ENV_PREFIX = "BONDTRANS_"

USER_AGENT = f"{APP_NAME}/{__version__}"
