"""Punto de entrada de la calculadora."""

import logging
import tkinter as tk
from pathlib import Path

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp
from history_store import HistoryStore


HISTORY_FILE = Path.home() / ".calc_history_v1.json"
HISTORY_LIMIT = 200
LOG_LEVEL = logging.INFO


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    history = HistoryStore(HISTORY_FILE, limit=HISTORY_LIMIT)
    history.load()

    root = tk.Tk()
    root.geometry("360x640")
    root.minsize(320, 560)
    CalculatorApp(root, engine=CalculatorEngine(), history=history)
    root.mainloop()


if __name__ == "__main__":
    main()
