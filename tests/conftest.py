"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from common.constants import QUESTIONS_DIR_NAME
from storage_api.repositories.blob_repository import BlobRepository
from storage_api.repositories.record_repository import RecordRepository
from storage_api.services.file_service import DEFAULT_POLICIES, FileService
from storage_api.services.question_service import QuestionService

TEST_API_KEY = "test-secret-key"


@pytest.fixture
def data_dir(tmp_path):
    """
    Create temporary data root.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary data directory
    """
    path = tmp_path / 'data'
    path.mkdir()
    return path


@pytest.fixture
def record_repo(data_dir):
    """
    Create a record repository over a temporary questions directory.
    """
    return RecordRepository(data_dir / QUESTIONS_DIR_NAME)


@pytest.fixture
def blob_repo(data_dir):
    """
    Create a blob repository with the default upload folders.
    """
    return BlobRepository(data_dir, DEFAULT_POLICIES.keys())


@pytest.fixture
def question_service(record_repo):
    return QuestionService(record_repo)


@pytest.fixture
def file_service(blob_repo):
    return FileService(blob_repo)


@pytest.fixture
def sample_question():
    """
    Question document as sent by the main backend.

    Returns:
        Dict with metadata, test cases and an extra field
    """
    return {
        'title': 'Two Sum',
        'slug': 'two-sum',
        'difficulty': 'Easy',
        'tags': ['array', 'hash-table'],
        'companies': ['Google', 'Amazon'],
        'testCases': [
            {'input': '[2,7,11,15]\n9', 'output': '[0,1]'},
            {'input': '[3,2,4]\n6', 'output': '[1,2]'},
        ],
        'timeLimit': 2000,
        'memoryLimit': 256,
        'description': 'Find two numbers that add up to target.',
    }


@pytest.fixture
def client(data_dir, monkeypatch):
    """
    Create FastAPI test client backed by a temporary data directory.

    Args:
        data_dir: Temporary data root fixture
        monkeypatch: pytest monkeypatch fixture

    Yields:
        TestClient with startup events run
    """
    monkeypatch.setattr("storage_api.config.DATA_DIR", str(data_dir))
    monkeypatch.setattr("storage_api.config.API_KEY", TEST_API_KEY)
    monkeypatch.setattr("storage_api.config.PUBLIC_BASE_URL", None)

    from storage_api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {'X-API-Key': TEST_API_KEY}
