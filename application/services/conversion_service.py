from decimal import Decimal, DecimalException

from domain.exceptions.currency import NonFiniteComputationResult, RateUnavailableForPair
from domain.models.currency import ConversionQuote, RateTable

ONE = Decimal(1)


class ConversionService:
	"""Decimal-only arithmetic over a resolved ``RateTable``."""

	def convert(self, table: RateTable, amount: Decimal, to_currency: str) -> Decimal:
		# Identity must not go through multiplication
		if to_currency == table.base:
			return amount

		rate = self.forward_rate(table, to_currency)
		return self._multiply(amount, rate, table.base, to_currency)

	def forward_rate(self, table: RateTable, to_currency: str) -> Decimal:
		if to_currency == table.base:
			return ONE
		rate = table.rates.get(to_currency)
		if rate is None:
			raise RateUnavailableForPair(table.base, to_currency)
		return rate

	def inverse_rate(self, table: RateTable, currency: str) -> Decimal:
		"""Rate for 1 ``currency`` expressed in ``table.base``; the swapped direction."""
		if currency == table.base:
			return ONE

		rate = table.rates.get(currency)
		if rate is None:
			raise RateUnavailableForPair(currency, table.base)
		if not rate.is_finite() or rate.is_zero():
			raise NonFiniteComputationResult(f'Cannot invert {table.base}->{currency} rate {rate}')

		try:
			inverse = ONE / rate
		except DecimalException as e:
			raise NonFiniteComputationResult(
				f'Cannot invert {table.base}->{currency} rate {rate}: {e!r}'
			) from e

		if not inverse.is_finite():
			raise NonFiniteComputationResult(f'Inverse of {table.base}->{currency} is {inverse}')
		return inverse

	def quote(self, table: RateTable, amount: Decimal, to_currency: str) -> ConversionQuote:
		return ConversionQuote(
			from_currency=table.base,
			to_currency=to_currency,
			amount=amount,
			converted_amount=self.convert(table, amount, to_currency),
			rate=self.forward_rate(table, to_currency),
			inverse_rate=self.inverse_rate(table, to_currency),
			source=table.source,
			as_of=table.as_of,
		)

	def swap_quote(self, table: RateTable, amount: Decimal, old_to: str) -> ConversionQuote:
		"""
		Quote ``amount`` of ``old_to`` in ``table.base``, reusing the table that was
		resolved for the old "from" currency instead of resolving a new one.
		"""
		rate = self.inverse_rate(table, old_to)
		if old_to == table.base:
			converted_amount = amount
		else:
			converted_amount = self._multiply(amount, rate, old_to, table.base)

		return ConversionQuote(
			from_currency=old_to,
			to_currency=table.base,
			amount=amount,
			converted_amount=converted_amount,
			rate=rate,
			inverse_rate=self.forward_rate(table, old_to),
			source=table.source,
			as_of=table.as_of,
		)

	def _multiply(self, amount: Decimal, rate: Decimal, from_currency: str, to_currency: str) -> Decimal:
		try:
			converted_amount = amount * rate
		except DecimalException as e:
			raise NonFiniteComputationResult(
				f'Converting {amount} {from_currency} to {to_currency} failed: {e!r}'
			) from e

		if not converted_amount.is_finite():
			raise NonFiniteComputationResult(
				f'Converting {amount} {from_currency} to {to_currency} gave {converted_amount}'
			)
		return converted_amount
