"""
Monthly utility bills from simulated fuel usage.

Carriers are summed uniformly, so the aggregator does not care which
appliance (or combination of appliances) produced the usage.
"""
import logging
from dataclasses import dataclass

import pandas as pd

from .constants import (
    CUBIC_METRES_PER_CCF,
    DEFAULT_ELECTRICITY_PRICE_PER_KWH,
    DEFAULT_NATURAL_GAS_PRICE_PER_CUBIC_METRE,
    ELECTRICITY_KWH_PER_HOUR,
    FUEL_CARRIERS,
    NATURAL_GAS_CCF_PER_HOUR,
)
from .simulate import fuel_carriers

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class UtilityPrices:
    electricity_price_per_kwh: float = DEFAULT_ELECTRICITY_PRICE_PER_KWH
    natural_gas_price_per_cubic_metre: float = DEFAULT_NATURAL_GAS_PRICE_PER_CUBIC_METRE
    # Connection charges, only billed for services the home actually uses
    electricity_fixed_monthly: float = 0.0
    natural_gas_fixed_monthly: float = 0.0


@dataclass(frozen=True)
class MonthlyBill:
    month: str                  # 'YYYY-MM' (UTC)
    natural_gas_ccf: float
    electricity_kwh: float
    prices: UtilityPrices
    natural_gas_connected: bool = False
    electricity_connected: bool = False

    @property
    def natural_gas_cubic_metres(self):
        return self.natural_gas_ccf * CUBIC_METRES_PER_CCF

    def natural_gas_cost(self):
        cost = self.natural_gas_cubic_metres * self.prices.natural_gas_price_per_cubic_metre
        if self.natural_gas_connected:
            cost += self.prices.natural_gas_fixed_monthly
        return cost

    def electricity_cost(self):
        cost = self.electricity_kwh * self.prices.electricity_price_per_kwh
        if self.electricity_connected:
            cost += self.prices.electricity_fixed_monthly
        return cost

    def total_cost(self):
        return self.natural_gas_cost() + self.electricity_cost()


def compute_bills(df: pd.DataFrame, prices: UtilityPrices):
    """
    Groups a simulation frame (see simulate.simulate) into calendar months.

    Raises:
        ValueError: if the frame reports a carrier there is no price for.
    """
    carriers = fuel_carriers(df)
    unknown = [c for c in carriers if c not in FUEL_CARRIERS]
    if unknown:
        raise ValueError(f"No price available for fuel carrier(s): {', '.join(unknown)}")

    if df.empty:
        return []

    consumption = pd.DataFrame(index=df.index)
    for carrier in FUEL_CARRIERS:
        if carrier in df.columns:
            consumption[carrier] = df[carrier] * df['dt_hours']
        else:
            consumption[carrier] = 0.0

    gas_connected = bool(consumption[NATURAL_GAS_CCF_PER_HOUR].sum() > 0)
    electricity_connected = bool(consumption[ELECTRICITY_KWH_PER_HOUR].sum() > 0)

    index = consumption.index
    if index.tz is not None:
        index = index.tz_convert(None)
    monthly = consumption.groupby(index.to_period('M')).sum()

    bills = []
    for period, row in monthly.iterrows():
        bills.append(MonthlyBill(
            month=str(period),
            natural_gas_ccf=float(row[NATURAL_GAS_CCF_PER_HOUR]),
            electricity_kwh=float(row[ELECTRICITY_KWH_PER_HOUR]),
            prices=prices,
            natural_gas_connected=gas_connected,
            electricity_connected=electricity_connected,
        ))

    _LOGGER.debug("Computed %d monthly bills", len(bills))
    return bills


def annual_cost(bills) -> float:
    return sum(b.total_cost() for b in bills)
