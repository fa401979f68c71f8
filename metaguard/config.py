import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Logging
    LOG_LEVEL = os.getenv('METAGUARD_LOG_LEVEL', 'WARNING').upper()

    # OpenAPI document defaults (overridable from the CLI)
    OPENAPI_VERSION = os.getenv('METAGUARD_OPENAPI_VERSION', '3.0.2')
    DOCS_TITLE = os.getenv('METAGUARD_DOCS_TITLE', 'API')
    DOCS_VERSION = os.getenv('METAGUARD_DOCS_VERSION', '1.0.0')
    DOCS_OUTPUT = os.getenv('METAGUARD_DOCS_OUTPUT', 'swagger.json')
    DOCS_SERVER = os.getenv('METAGUARD_DOCS_SERVER', '/')

    # Request correlation
    REQUEST_ID_HEADER = os.getenv('METAGUARD_REQUEST_ID_HEADER', 'X-Request-ID')
