"""Pytest configuration and fixtures."""

import logging
import os
import tempfile

import pytest

from shared.helper.HelperConfig import HelperConfig

# set before test modules import the app, which configures logging on import
os.environ.setdefault("ROOT_DIR", tempfile.mkdtemp(prefix="fitplan-tests-"))
os.environ["EMBED_HUGGINGFACE_API_KEY"] = "test-hf-key"
os.environ["LLM_OPENROUTER_API_KEY"] = "test-openrouter-key"
os.environ["STORE_SUPABASE_URL"] = "https://test.supabase.co"
os.environ["STORE_SUPABASE_SERVICE_KEY"] = "test-service-key"
os.environ["CHECK_CONNECTIONS"] = "false"


@pytest.fixture
def helper_config() -> HelperConfig:
    return HelperConfig(logger=logging.getLogger("fitplan.tests"))
