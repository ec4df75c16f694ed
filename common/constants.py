"""Project-wide constants (chunk sizing, file size policy, storage layout)."""

ADDRESS_SIZE_BYTES: int = 32  # SHA3-256 digest length

MIN_CHUNK_SIZE: int = 1024  # 1 KiB
MAX_CHUNK_SIZE: int = 1024 * 1024  # 1 MiB
MAX_FILE_SIZE: int = 1024 * 1024 * 1024  # 1 GiB ceiling on supported input

DEFAULT_STORAGE_DIRNAME: str = "chunk_store_test"
DATA_MAP_FILENAME: str = "data_map"

DEFAULT_CONFIG_PATH: str = "~/.selfencrypt/config.json"
