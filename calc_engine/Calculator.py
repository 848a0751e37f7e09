# Calculator.py
"""Public facade of the calculation engine.

Responsibilities
----------------
- Hold configuration: angle mode, debug flag, constant table, rounding
- Build a fresh CallContext for every call and thread it through
  normalization, validation and evaluation
- Record the outcome of solve()/check_syntax() (current expression,
  variables, last error) for later inspection
- Render results for display (decimal or fraction, '=' or '≈')
"""
import fractions
import math
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from . import config_manager
from . import ScientificEngine
from . import MathEngine
from . import Normalizer
from . import Validator
from . import error as E
from .debug import checkpoint, combine, log_checkpoint

FRACTION_MAX_DENOMINATOR = 100000


@dataclass(frozen=True)
class CallContext:
    """Everything a single evaluation reads; never mutated once built."""
    expression: str
    variables: Mapping[str, float] = field(default_factory=dict)
    constants: Mapping[str, float] = field(default_factory=dict)
    radians: bool = False
    trace: Optional[Callable] = None


@dataclass(frozen=True)
class Evaluation:
    value: Optional[float] = None
    canonical: Optional[str] = None
    error: Optional[E.ErrorRecord] = None

    @property
    def ok(self):
        return self.error is None


class Engine:
    def __init__(self, radians=False, debug=False, constants=None, decimal_places=12,
                 fractions=False, trace=None):
        self.radians = radians
        self.debug = debug
        self.decimal_places = decimal_places
        self.fractions = fractions
        self.trace = trace

        self.constants = dict(ScientificEngine.CONSTANTS)
        if constants:
            self.constants.update(constants)

        # Outcome of the last solve()/check_syntax() call
        self.current_expression = None
        self.variables = {}
        self.last_error = None
        self.last_result = None

    @classmethod
    def from_settings(cls, settings=None, **overrides):
        """Build an engine from the settings file (or a given settings dict)."""
        if settings is None:
            settings = config_manager.load_setting_value("all")

        options = {
            "radians": bool(settings.get("radians", False)),
            "debug": bool(settings.get("debug", False)),
            "constants": settings.get("constants") or {},
            "decimal_places": int(settings.get("decimal_places", 12)),
            "fractions": bool(settings.get("fractions", False)),
        }
        options.update(overrides)
        return cls(**options)

    # -----------------------------
    # Pipeline
    # -----------------------------

    def _context(self, expression, variables=None):
        trace = combine(log_checkpoint if self.debug else None, self.trace)
        return CallContext(
            expression=expression,
            variables=dict(variables or {}),
            constants=dict(self.constants),
            radians=self.radians,
            trace=trace,
        )

    def _syntax(self, context):
        """Normalize and validate; returns the canonical expression."""
        canonical = Normalizer.normalize(context.expression, context.constants, context.trace)
        try:
            Validator.validate(canonical, context.trace)
        except E.SyntaxError as e:
            e.equation = context.expression
            checkpoint(context.trace, "syntax-error", e.record())
            raise
        return canonical

    def _execute(self, canonical, context):
        """Evaluate a validated expression; returns the unrounded value or raises MathError."""
        try:
            ergebnis = MathEngine.solve_expression(canonical, context)

        except E.MathError as e:
            e.equation = context.expression
            checkpoint(context.trace, "execution-error", e.record())
            raise
        # Known numeric overflow
        except OverflowError as e:
            raise E.IndeterminateResultError(f"Number too large ({e}).",
                                             equation=context.expression) from e
        except (ValueError, TypeError, ZeroDivisionError) as e:
            raise E.MathError(f"Unexpected Error: {e}", code="9999",
                              equation=context.expression) from e

        return ergebnis

    def round_result(self, ergebnis):
        if not math.isfinite(ergebnis):
            return ergebnis
        return round(ergebnis, self.decimal_places)

    # -----------------------------
    # Public operations
    # -----------------------------

    def evaluate(self, expression, variables=None):
        """Solve `expression` without touching engine state; returns an Evaluation."""
        context = self._context(expression, variables)
        try:
            canonical = self._syntax(context)
        except E.SyntaxError as e:
            return Evaluation(error=e.record())

        try:
            ergebnis = self._execute(canonical, context)
        except E.MathError as e:
            return Evaluation(canonical=canonical, error=e.record())
        return Evaluation(value=self.round_result(ergebnis), canonical=canonical)

    def check_syntax(self, expression):
        """True when `expression` normalizes into a valid canonical expression."""
        self.last_error = None
        self.current_expression = expression

        context = self._context(expression)
        try:
            self.current_expression = self._syntax(context)
        except E.SyntaxError as e:
            self.last_error = e.record()
            return False
        return True

    def solve(self, expression, variables=None):
        """Return the rounded result, or None with last_error describing the failure."""
        evaluation = self.evaluate(expression, variables)

        self.variables = dict(variables or {})
        self.current_expression = evaluation.canonical or expression
        self.last_error = evaluation.error
        self.last_result = evaluation.value
        return evaluation.value

    def calculate(self, expression, variables=None):
        """Solve and render for display: '= 14', '≈ 0.333333333333', '= 1 1/2'.

        Raises the MathError of a failed call (also kept in last_error).
        """
        context = self._context(expression, variables)
        self.variables = dict(variables or {})
        self.last_error = None
        self.last_result = None
        self.current_expression = expression
        try:
            canonical = self._syntax(context)
            self.current_expression = canonical
            ergebnis = self._execute(canonical, context)
        except E.MathError as e:
            self.last_error = e.record()
            raise

        self.last_result = self.round_result(ergebnis)
        ausgabe_string, rounding = self.cleanup(ergebnis)

        if rounding:
            return "≈ " + ausgabe_string
        return "= " + ausgabe_string

    # -----------------------------
    # Result formatting
    # -----------------------------

    def cleanup(self, ergebnis):
        """Format a result as fraction or decimal text.

        Returns:
            (rendered_value, rounding_flag)
        where rounding_flag tells whether rounding changed the value.
        """
        if not math.isfinite(ergebnis):
            return ScientificEngine.to_plain_string(ergebnis), False

        gerundet = self.round_result(ergebnis)
        rounding = gerundet != ergebnis

        if self.fractions and not float(gerundet).is_integer():
            bruch = self.as_fraction(gerundet)
            if bruch is not None:
                return bruch, False

        return ScientificEngine.to_plain_string(gerundet), rounding

    def as_fraction(self, value):
        """Mixed fraction text for value, or None when no fraction reproduces it."""
        gekuerzter_bruch = fractions.Fraction(value).limit_denominator(FRACTION_MAX_DENOMINATOR)
        zaehler = gekuerzter_bruch.numerator
        nenner = gekuerzter_bruch.denominator

        # Must match the value at the displayed precision
        if self.round_result(zaehler / nenner) != value:
            return None

        if abs(zaehler) > nenner:
            # Mixed fraction form (e.g., 3/2 -> "1 1/2")
            ganzzahl = zaehler // nenner
            rest_zaehler = zaehler % nenner
            if rest_zaehler == 0:
                return str(ganzzahl)
            # Adjust for negatives so that the remainder part is positive
            if ganzzahl < 0 and rest_zaehler > 0:
                ganzzahl += 1
                rest_zaehler = abs(nenner - rest_zaehler)
            return f"{ganzzahl} {rest_zaehler}/{nenner}"

        return f"{zaehler}/{nenner}"

    # -----------------------------
    # Primitives bound to this engine's angle mode
    # -----------------------------

    def divide(self, operand1, operand2):
        return ScientificEngine.divide(operand1, operand2)

    def pow(self, base, exponent):
        return ScientificEngine.pow_signed(base, exponent)

    def fact(self, value):
        return ScientificEngine.factorial(value)

    def fractionate(self, decimal):
        return ScientificEngine.fractionate(decimal)

    def sin(self, angle):
        return ScientificEngine.sin(angle, self.radians)

    def cos(self, angle):
        return ScientificEngine.cos(angle, self.radians)

    def tan(self, angle):
        return ScientificEngine.tan(angle, self.radians)

    def asin(self, ratio):
        return ScientificEngine.asin(ratio, self.radians)

    def acos(self, ratio):
        return ScientificEngine.acos(ratio, self.radians)

    def atan(self, ratio):
        return ScientificEngine.atan(ratio, self.radians)


_default_engine = None


def default_engine():
    """Engine built from the settings file on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = Engine.from_settings()
    return _default_engine


def solve(expression, variables=None):
    return default_engine().solve(expression, variables)


def check_syntax(expression):
    return default_engine().check_syntax(expression)
