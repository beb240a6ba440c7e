"""
File Utilities Module
Common file operations and path handling functions.
"""

from pathlib import Path

# Extensions treated as ready-made images rather than pages to capture
IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.bmp', '.gif', '.tif', '.tiff', '.webp'}


def normalize_path(path: str | Path) -> Path:
    """Convert string path to normalized Path object."""
    return Path(path).resolve()


def is_image_file(path: str | Path) -> bool:
    """Check if path points to an existing file with an image extension."""
    path = Path(path)
    return path.suffix.lower() in IMAGE_EXTENSIONS and path.is_file()


def ensure_directory(directory: Path) -> None:
    """Ensure directory exists, create if necessary."""
    directory.mkdir(parents=True, exist_ok=True)


def read_file_bytes(file_path: Path) -> bytes:
    """
    Read a binary file.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    with open(file_path, 'rb') as f:
        return f.read()


def write_file_bytes(file_path: Path, data: bytes) -> Path:
    """Write bytes to file_path, creating parent directories as needed."""
    file_path = Path(file_path)
    ensure_directory(file_path.parent)
    with open(file_path, 'wb') as f:
        f.write(data)
    return file_path
