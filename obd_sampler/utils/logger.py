import queue
import sys

class LogQueue:
    """
    Singleton-like helper to redirect stdout/stderr to a queue.
    Decouples the diagnostic output of the pipeline from Tkinter.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(LogQueue, cls).__new__(cls)
            cls._instance.queue = queue.Queue()
            cls._instance.is_redirected = False
            cls._instance._original = (sys.stdout, sys.stderr)
        return cls._instance

    def write(self, msg):
        if msg:
            self.queue.put(msg)

    def flush(self):
        pass

    def drain(self) -> list:
        """Return and remove every queued message."""
        messages = []
        while True:
            try:
                messages.append(self.queue.get_nowait())
            except queue.Empty:
                return messages

    def redirect_sys_output(self):
        if not self.is_redirected:
            self._original = (sys.stdout, sys.stderr)
            sys.stdout = self
            sys.stderr = self
            self.is_redirected = True

    def restore_sys_output(self):
        if self.is_redirected:
            sys.stdout, sys.stderr = self._original
            self.is_redirected = False
