#!/usr/bin/env python3
"""Entry point for the OBD2 data sampler GUI"""
import tkinter as tk
from obd_sampler.gui.main_window import SamplerGUI
from obd_sampler.gui.thread_safe_console import ThreadSafeConsole

def main():
    root = tk.Tk()
    app = SamplerGUI(root)

    console = ThreadSafeConsole()
    console.set_target(app.text_log)
    console.redirect_sys_output()
    console.start_polling(root)

    root.mainloop()

if __name__ == "__main__":
    main()
