"""File selection logic for the GUI"""
from tkinter import filedialog
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from obd_sampler.gui.main_window import SamplerGUI


class FileManager:
    """Handles file selection"""

    def __init__(self, gui: "SamplerGUI"):
        self.gui = gui

        # Connect button commands
        self.gui.btn_select_files.config(command=self.browse_files)

    def browse_files(self) -> None:
        """Open file browser for selecting one or more CSV files"""
        files = filedialog.askopenfilenames(
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")]
        )
        if files:
            self.gui.pipeline_actions.start_upload(list(files))
