import os
from typing import List, Sequence

class FileSystemScanner:
    """
    Utility class to find the CSV logs to sample.
    Decouples file system access from the GUI and the CLI.
    """

    # Folders to ignore during scanning
    IGNORED_FOLDERS = {
        "__pycache__", ".git", "$recycle.bin", "system volume information"
    }

    # Supported file extensions
    SUPPORTED_EXTENSIONS = (".csv",)

    # Output of a previous run, never an input
    IGNORED_FILES = {"sampled-data.csv"}

    @classmethod
    def _is_supported(cls, filename: str) -> bool:
        name = filename.lower()
        return name.endswith(cls.SUPPORTED_EXTENSIONS) and name not in cls.IGNORED_FILES

    @classmethod
    def get_recursive_files(cls, path: str) -> List[str]:
        """
        Recursively finds all CSV files in a directory.

        Args:
            path (str): The root directory or file path.

        Returns:
            List[str]: A sorted list of unique file paths. A file path is returned as is.
        """
        if os.path.isfile(path):
            return [path]

        files = []
        if os.path.isdir(path):
            for root, dirs, filenames in os.walk(path):
                dirs[:] = [d for d in dirs if d.lower() not in cls.IGNORED_FOLDERS]
                for filename in filenames:
                    if cls._is_supported(filename):
                        files.append(os.path.join(root, filename))

        return sorted(set(files))

    @classmethod
    def collect(cls, paths: Sequence[str]) -> List[str]:
        """Expand files and folders into an ordered file list, keeping argument order."""
        collected: List[str] = []
        for path in paths:
            for f in cls.get_recursive_files(path):
                if f not in collected:
                    collected.append(f)
        return collected
