"""
Interfaz gráfica de la calculadora.

Usa tkinter. La evaluación es síncrona: el motor no hace E/S y su coste
es proporcional a la longitud de la expresión.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine
from expression_input import ExpressionInput
from history_store import HistoryStore

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal: pantalla, teclado e historial."""

    ERROR_TEXT = "Error"

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "expr_fg":    "#BAC2DE",
        "result_fg":  "#A6E3A1",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)
    #  tipo_color: "num", "op", "func", "special", "equals"

    KEYPAD = [
        [("C",  "clear",     "special"), ("⌫", "backspace", "special"),
         ("(",  "insert:(",  "func"),    (")", "insert:)", "func")],

        [("%",  "insert:%",  "func"),    ("÷", "insert:/", "op")],

        [("7",  "insert:7",  "num"), ("8", "insert:8", "num"),
         ("9",  "insert:9",  "num"), ("×", "insert:*", "op")],

        [("4",  "insert:4",  "num"), ("5", "insert:5", "num"),
         ("6",  "insert:6",  "num"), ("−", "insert:-", "op")],

        [("1",  "insert:1",  "num"), ("2", "insert:2", "num"),
         ("3",  "insert:3",  "num"), ("+", "insert:+", "op")],

        [("0",  "insert:0",  "num"), (".",  "insert:.",  "num"),
         ("=",  "equals",    "equals")],
    ]

    # Teclas físicas que se insertan tal cual en la expresión
    TYPED_KEYS = set("0123456789.+-*/%()")

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None, history=None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.engine = engine if engine is not None else CalculatorEngine()
        self.history = history if history is not None else HistoryStore()
        self.input = ExpressionInput()

        self._init_fonts()
        self._create_display()
        self._create_toggle_bar()
        self._create_keypad()
        self._create_history_panel()
        self._bind_keyboard()

        self._render_history()
        self._update_display()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_display = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_btn     = tkfont.Font(family="Segoe UI", size=15)
        self._f_small   = tkfont.Font(family="Segoe UI", size=11)
        self._f_history = tkfont.Font(family="Consolas", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.display_var = tk.StringVar(value="0")
        tk.Label(
            frame, textvariable=self.display_var,
            font=self._f_display, bg=self.C["display_bg"],
            fg=self.C["result_fg"], anchor="e",
        ).pack(fill="x", pady=(4, 4))

    def _update_display(self):
        self.display_var.set(self.input.display_text)

    # ── Barra de toggles (solo teclado) ──────────────────────────

    def _create_toggle_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.keyboard_only_var = tk.BooleanVar(value=False)
        tk.Checkbutton(
            frame, text="Solo teclado", font=self._f_small,
            variable=self.keyboard_only_var,
            bg=self.C["bg"], fg=self.C["special_fg"],
            selectcolor=self.C["func"], activebackground=self.C["bg"],
            command=self._toggle_keyboard_only,
        ).pack(side="left")

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))
        self.keypad_frame = frame

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    takefocus=False,
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # El último botón (generalmente '=') absorbe las columnas sobrantes
        spans[-1] += extra
        return spans

    # ── Historial ────────────────────────────────────────────────

    def _create_history_panel(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", padx=6, pady=(0, 6))

        header = tk.Frame(frame, bg=self.C["bg"])
        header.pack(fill="x")
        tk.Label(
            header, text="Historial", font=self._f_small,
            bg=self.C["bg"], fg=self.C["expr_fg"],
        ).pack(side="left")
        tk.Button(
            header, text="Borrar historial", font=self._f_small,
            bg=self.C["func"], fg=self.C["func_fg"],
            activebackground=self.C["special"], relief="flat",
            cursor="hand2", takefocus=False, command=self._clear_history,
        ).pack(side="right")

        self.history_list = tk.Listbox(
            frame, height=6, font=self._f_history,
            bg=self.C["display_bg"], fg=self.C["expr_fg"],
            selectbackground=self.C["special"], relief="flat",
            activestyle="none",
        )
        self.history_list.pack(fill="both", expand=True, pady=(4, 0))
        self.history_list.bind("<ButtonRelease-1>", self._on_history_select)
        self.history_list.bind("<Return>", self._on_history_select)

    def _render_history(self):
        self.history_list.delete(0, tk.END)
        for entry in self.history.recent():
            self.history_list.insert(tk.END,
                                     f"{entry.expression} = {entry.result}")

    def _on_history_select(self, _event=None):
        selection = self.history_list.curselection()
        if not selection:
            return None
        entry = self.history.recent()[selection[0]]
        self.input.set(entry.expression)
        # La lista suelta selección y foco: Enter vuelve a evaluar
        self.history_list.selection_clear(0, tk.END)
        self.root.focus_set()
        self._update_display()
        return "break"

    def _clear_history(self):
        self.history.clear()
        self._render_history()

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)
        self.root.bind("<Return>", lambda _e: self._on_key("equals"))
        self.root.bind("<KP_Enter>", lambda _e: self._on_key("equals"))
        self.root.bind("<BackSpace>", lambda _e: self._on_key("backspace"))
        self.root.bind("<Escape>", lambda _e: self._on_key("clear"))

    def _on_keypress(self, event):
        char = event.char
        if char == "=":
            self._on_key("equals")
        elif char and char in self.TYPED_KEYS:
            self._on_key(f"insert:{char}")

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        if action == "clear":
            self.input.clear()
        elif action == "backspace":
            self.input.backspace()
        elif action == "equals":
            self._calculate()
            return
        elif action.startswith("insert:"):
            self.input.append(action[7:])
        self._update_display()

    def _calculate(self):
        expr = self.input.text
        if not expr:
            return

        result = self.engine.evaluate_expression(expr)
        if not result.ok:
            logger.info("Expresión rechazada %r: %s", expr, result.kind.value)
            self.input.clear()
            self.display_var.set(self.ERROR_TEXT)
            return

        self.history.add(expr, result.value)
        self._render_history()
        self.input.set(result.value)
        self._update_display()

    # ── Toggles ──────────────────────────────────────────────────

    def _toggle_keyboard_only(self):
        if self.keyboard_only_var.get():
            self.keypad_frame.pack_forget()
        else:
            self.keypad_frame.pack(fill="both", expand=True, padx=6,
                                   pady=(2, 6), before=self.history_list.master)
