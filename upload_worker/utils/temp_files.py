from pathlib import Path

from upload_worker.utils.logger import get_logger

logger = get_logger("upload_worker.temp_files")


def delete_temp_file(path: Path) -> None:
    """Delete a staged temporary file. Raises OSError if it cannot be removed."""
    Path(path).unlink()
    logger.debug(f"Temporary file {path} deleted")
