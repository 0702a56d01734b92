import tkinter as tk
from obd_sampler.utils.logger import LogQueue

class ThreadSafeConsole:
    """
    UI Bridge that polls the thread-safe LogQueue and updates the Tkinter widget.
    Pipeline output printed from the worker thread reaches the widget on the main thread.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ThreadSafeConsole, cls).__new__(cls)
            cls._instance.logger = LogQueue()
            cls._instance.target_widget = None
        return cls._instance

    def set_target(self, widget: tk.Text):
        self.target_widget = widget

    def redirect_sys_output(self):
        self.logger.redirect_sys_output()

    def start_polling(self, root: tk.Tk, interval_ms=100):
        """Start the periodic poll of the queue."""
        def poll():
            try:
                if not root.winfo_exists():
                    return

                for msg in self.logger.drain():
                    self._safe_append(msg)

                root.after(interval_ms, poll)

            except (tk.TclError, RuntimeError):
                # "invalid command name" comes from Tcl when the window is gone
                self.logger.restore_sys_output()

        root.after(interval_ms, poll)

    @staticmethod
    def tag_for(msg: str) -> str:
        lower_msg = msg.lower()
        if "[error]" in lower_msg:
            return "error"
        if "[pipeline]" in lower_msg:
            return "pipeline"
        return "info"

    def _safe_append(self, msg):
        """Append to widget. Must call in main thread."""
        target = self.target_widget
        if not target:
            return

        try:
            target.config(state="normal")
            target.insert("end", msg, self.tag_for(msg))
            target.see("end")
            target.config(state="disabled")
        except tk.TclError:
            # Widget might be destroyed
            pass
