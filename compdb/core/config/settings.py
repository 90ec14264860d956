# File: compdb/core/config/settings.py


class Settings:
    # --- File Names ---
    TARGET_FILE_NAME: str = "compile_commands.json"
    # Written relative to the current working directory
    OUTPUT_FILE_NAME: str = "compile_commands.json"

    # --- Channel ---
    # Max in-flight discovered paths before walkers suspend on send
    QUEUE_CAPACITY: int = 32

    # --- Splicing ---
    LIST_START: bytes = b"["
    LIST_END: bytes = b"]"
    SEPARATOR: bytes = b","
    READ_CHUNK_SIZE: int = 65536

    # --- Logging ---
    LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


settings = Settings()
