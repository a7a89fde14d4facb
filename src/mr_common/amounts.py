"""Integer arithmetic utilities for reward amounts.

All weights, output factors, durations and reward amounts are int
(smallest token unit). No float, no Decimal.
"""


def reward_by_weight(weight: int, output_factor: int, duration: int) -> int:
    """Reward earned by `weight` at a constant output factor over `duration` seconds."""
    if weight < 0 or output_factor < 0:
        raise ValueError(
            f"Weight and output factor must be non-negative, got {weight}, {output_factor}"
        )
    if duration < 0:
        raise ValueError(f"Duration must be non-negative, got {duration}")
    return weight * output_factor * duration


def amount_to_display(amount: int, decimals: int = 18) -> str:
    """Render a token amount: 4860000002592000000 (18 dp) -> '4.860000002592'."""
    if decimals < 0:
        raise ValueError(f"Decimals must be non-negative, got {decimals}")
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), 10**decimals)
    if decimals == 0 or frac == 0:
        return f"{sign}{whole:,}"
    frac_str = f"{frac:0{decimals}d}".rstrip("0")
    return f"{sign}{whole:,}.{frac_str}"
