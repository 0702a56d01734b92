import os

from obd_sampler.settings import DEFAULT_ENCODING, DOWNLOAD_FILE_NAME


def get_path(relative_path: str, script_file: str = __file__) -> str:
    """
    Convert a relative path into an absolute path
    based on the location of a script file.

    Parameters:
        relative_path: str
            Path relative to the folder of script_file
        script_file: str
            Reference script file, defaults to this file

    Returns:
        str: absolute path
    """
    base_dir = os.path.dirname(os.path.abspath(script_file))
    return os.path.abspath(os.path.join(base_dir, relative_path))


def ensure_folder(folder_path):
    """Create folder if it doesn't exist."""
    if folder_path:
        os.makedirs(folder_path, exist_ok=True)


# -------------------------
# Sampled data download
# -------------------------
def write_sampled_file(text: str, output_dir: str, file_name: str = DOWNLOAD_FILE_NAME,
                       encoding: str = DEFAULT_ENCODING) -> str:
    """Write the sampled data text to output_dir/file_name and return the path."""
    ensure_folder(output_dir)
    output_path = os.path.join(output_dir, file_name)
    with open(output_path, "w", encoding=encoding, newline="") as f:
        f.write(text)
    print(f"[INFO] Saved sampled data → {output_path}")
    return output_path
