"""Acumulador de la expresión que el usuario va tecleando."""

import re


class ExpressionInput:
    """Buffer de entrada con las reglas de edición del teclado.

    No valida que la expresión completa sea evaluable: eso lo decide el
    motor al pulsar '='.
    """

    _SEGMENT_SPLIT_RE = re.compile(r"[+\-*/()%]")

    def __init__(self, text: str = ""):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    @property
    def display_text(self) -> str:
        return self._text or "0"

    def _last_segment(self) -> str:
        return self._SEGMENT_SPLIT_RE.split(self._text)[-1]

    def append(self, value: str) -> bool:
        """Añade una tecla. Devuelve False si la regla la descarta."""
        if re.fullmatch(r"\d", value):
            # "0" seguido de otro dígito reemplaza el cero
            if self._last_segment() == "0":
                self._text = self._text[:-1] + value
                return True

        if value == ".":
            last = self._last_segment()
            if "." in last:
                return False
            if last == "":
                value = "0."

        if value == "%" and not self._text:
            return False

        self._text += value
        return True

    def backspace(self):
        self._text = self._text[:-1]

    def clear(self):
        self._text = ""

    def set(self, text: str):
        self._text = text
