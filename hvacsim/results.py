import matplotlib.pyplot as plt
import numpy as np

from . import billing
from .constants import BTU_PER_KWH, ELECTRICITY_KWH_PER_HOUR, NATURAL_GAS_CCF_PER_HOUR
from .simulate import unmet_load_btu, usage_totals


def summarize(name, df, prices):
    """Annual totals for one simulated scenario."""
    totals = usage_totals(df)
    bills = billing.compute_bills(df, prices)
    return {
        'name': name,
        'natural_gas_ccf': totals.get(NATURAL_GAS_CCF_PER_HOUR, 0.0),
        'electricity_kwh': totals.get(ELECTRICITY_KWH_PER_HOUR, 0.0),
        'delivered_kwh': float((df['btus_per_hour'].abs() * df['dt_hours']).sum()) / BTU_PER_KWH,
        'unmet_kwh': unmet_load_btu(df) / BTU_PER_KWH,
        'annual_cost': billing.annual_cost(bills),
        'monthly_costs': {b.month: b.total_cost() for b in bills},
    }


def print_summary(summaries):
    print("\n" + "="*72)
    print("ANNUAL ENERGY COSTS")
    print("="*72)
    print(f"{'Scenario':<28}{'Gas (CCF)':>10}{'Elec (kWh)':>12}{'Unmet (kWh)':>12}{'Cost':>10}")
    for s in summaries:
        print(f"{s['name']:<28}{s['natural_gas_ccf']:>10.0f}{s['electricity_kwh']:>12.0f}"
              f"{s['unmet_kwh']:>12.0f}{s['annual_cost']:>10.2f}")
    print("="*72)

    if len(summaries) > 1:
        cheapest = min(summaries, key=lambda s: s['annual_cost'])
        print(f"Cheapest: {cheapest['name']} (${cheapest['annual_cost']:,.2f}/yr)")


def plot_annual_costs(summaries, title_suffix=""):
    plt.figure(figsize=(12, 8))
    colors = plt.cm.Set1(np.arange(len(summaries)) % 9)

    # Subplot 1: Annual cost per scenario
    plt.subplot(2, 1, 1)
    names = [s['name'] for s in summaries]
    costs = [s['annual_cost'] for s in summaries]
    plt.barh(names, costs, color=colors)
    plt.gca().invert_yaxis()
    plt.xlabel("Annual Cost ($)")
    title = "Annual Energy Costs"
    if title_suffix:
        title += f" - {title_suffix}"
    plt.title(title)
    plt.grid(True, axis='x')

    # Subplot 2: Monthly breakdown
    plt.subplot(2, 1, 2)
    for s, color in zip(summaries, colors):
        months = list(s['monthly_costs'])
        plt.plot(months, list(s['monthly_costs'].values()), label=s['name'], color=color, marker='o')
    plt.ylabel("Monthly Cost ($)")
    plt.xticks(rotation=45)
    plt.legend()
    plt.grid(True)

    plt.tight_layout()
    plt.show()
