from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from decimal import ROUND_DOWN, ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import TYPE_CHECKING, Callable, Protocol, Union

from valueobjects.platform.errors import MoneyError

if TYPE_CHECKING:
    from valueobjects.platform.config import ValueObjectsConfig

DEFAULT_CURRENCY = "USD"
DEFAULT_SCALE = 20

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")

# Working precision for intermediate results before truncation to `scale`.
_ARITHMETIC_CONTEXT = Context(prec=200)

Numeric = Union[int, float, str, Decimal]


class CurrencyFormatter(Protocol):
    """
    CurrencyFormatter — port rendering an amount in a currency for display.

    Related:
      - src/valueobjects/shared_kernel/primitives/money.py
    """

    def format_currency(self, amount: Decimal, currency: str) -> str:
        """
        Render amount and ISO-4217 currency code as display text.

        Args:
            amount: Exact decimal amount.
            currency: Upper-case ISO-4217 code.
        Returns:
            str: Display text, e.g. `42.12 USD`.
        Assumptions:
            Implementations do not mutate global locale state.
        Raises:
            None.
        Side Effects:
            None.
        """
        ...


@dataclass(frozen=True, slots=True)
class PlainCurrencyFormatter:
    """Locale-neutral formatter: amount rounded half-up to `minor_digits`, then the code."""

    minor_digits: int = 2

    def format_currency(self, amount: Decimal, currency: str) -> str:
        quantum = Decimal(1).scaleb(-self.minor_digits)
        rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP, context=_ARITHMETIC_CONTEXT)
        return f"{rounded:f} {currency}"


@dataclass(frozen=True, slots=True)
class Money:
    """
    Money — exact decimal amount in one ISO-4217 currency.

    Rules:
    - amount is kept as `Decimal`; arithmetic results are truncated to `scale` digits
    - operands must share the currency; plain numbers adopt the receiver's currency
    - display text is delegated to a `CurrencyFormatter`
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY
    scale: int = field(default=DEFAULT_SCALE, compare=False)
    formatter: CurrencyFormatter = field(
        default_factory=PlainCurrencyFormatter,
        compare=False,
        repr=False,
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _to_decimal(self.amount))

        currency = self.currency.strip().upper() if isinstance(self.currency, str) else ""
        if not _CURRENCY_RE.match(currency):
            raise MoneyError(
                f"currency must be a 3-letter ISO-4217 code, got {self.currency!r}"
            )
        object.__setattr__(self, "currency", currency)

        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            raise MoneyError(f"scale must be a non-negative int, got {self.scale!r}")

    @classmethod
    def from_config(cls, amount: Numeric, config: ValueObjectsConfig) -> Money:
        """Money in the configured default currency and arithmetic scale."""
        return cls(_to_decimal(amount), config.money_currency, config.money_scale)

    def with_scale(self, scale: int) -> Money:
        return replace(self, scale=scale)

    def with_formatter(self, formatter: CurrencyFormatter) -> Money:
        return replace(self, formatter=formatter)

    def add(self, other: Money | Numeric) -> Money:
        return self._operation(Context.add, other)

    def sub(self, other: Money | Numeric) -> Money:
        return self._operation(Context.subtract, other)

    def mul(self, other: Money | Numeric) -> Money:
        return self._operation(Context.multiply, other)

    def div(self, other: Money | Numeric) -> Money:
        operand = self._coerce_operand(other)
        if operand.amount.is_zero():
            raise MoneyError("division by zero", details={"amount": str(self.amount)})
        return self._operation(Context.divide, operand)

    def round(self, precision: int) -> str:
        """Amount rounded half away from zero to `precision` digits, as text."""
        if precision < 0:
            raise MoneyError(f"precision must be >= 0, got {precision}")
        quantum = Decimal(1).scaleb(-precision)
        rounded = self.amount.quantize(quantum, rounding=ROUND_HALF_UP, context=_ARITHMETIC_CONTEXT)
        return f"{rounded:f}"

    def format(self) -> str:
        return self.formatter.format_currency(self.amount, self.currency)

    def __str__(self) -> str:
        return self.format()

    def _operation(
        self,
        function: Callable[[Context, Decimal, Decimal], Decimal],
        other: Money | Numeric,
    ) -> Money:
        operand = self._coerce_operand(other)
        raw = function(_ARITHMETIC_CONTEXT, self.amount, operand.amount)
        return replace(self, amount=_truncate(raw, scale=self.scale))

    def _coerce_operand(self, other: Money | Numeric) -> Money:
        if isinstance(other, Money):
            money = other
        else:
            money = Money(_to_decimal(other), self.currency, self.scale)

        if money.currency != self.currency:
            raise MoneyError(
                f"value must be of the same currency as {self.currency}",
                details={"expected": self.currency, "actual": money.currency},
            )
        return money


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, bool):
        raise MoneyError("value must be either numeric or an instance of Money")
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        parsed = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation as error:
            raise MoneyError(f"not a numeric amount: {value!r}") from error
    else:
        raise MoneyError("value must be either numeric or an instance of Money")

    if not parsed.is_finite():
        raise MoneyError(f"amount must be finite, got {value!r}")
    return parsed


def _truncate(value: Decimal, *, scale: int) -> Decimal:
    # Drop digits beyond `scale` without rounding, then trailing zeros of the fraction.
    quantum = Decimal(1).scaleb(-scale)
    truncated = value.quantize(quantum, rounding=ROUND_DOWN, context=_ARITHMETIC_CONTEXT)
    if truncated == truncated.to_integral_value():
        return truncated.quantize(Decimal(1), context=_ARITHMETIC_CONTEXT)
    return truncated.normalize(context=_ARITHMETIC_CONTEXT)
