"""Project-wide constants (bucket names, size ceilings, on-disk layout)."""

MAX_UPLOAD_SIZE_BYTES: int = 5 * 1024 * 1024  # 5 MiB upload ceiling

QUESTIONS_DIR_NAME: str = "questions"
RECORD_FILE_SUFFIX: str = ".json"
TEMP_FILE_SUFFIX: str = ".tmp"

RECORD_ID_BYTES: int = 12
MAX_RECORD_ID_LENGTH: int = 128
MAX_EXTENSION_LENGTH: int = 10

PROFILE_IMAGES_BUCKET: str = "profileimages"
RESUMES_BUCKET: str = "resumes"

DEFAULT_DATA_DIR: str = "./data"
DEFAULT_PORT: int = 3000
