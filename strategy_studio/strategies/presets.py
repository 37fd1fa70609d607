"""Built-in strategy presets."""

from strategy_studio.core.types import TIMEFRAMES, Condition, IndicatorKind, IndicatorRef, Operator, Strategy


def default_strategy(timeframe: str = "1m") -> Strategy:
    """Enter when price crosses above SMA 20, exit on the cross back below. TP 2%, SL 1%."""
    if timeframe not in TIMEFRAMES:
        raise ValueError(f"Unsupported timeframe: {timeframe}")
    price = IndicatorRef(IndicatorKind.PRICE)
    sma20 = IndicatorRef(IndicatorKind.SMA, 20)
    return Strategy(
        name="Price Above SMA 20; Exit on cross below",
        timeframe=timeframe,
        take_profit_pct=2.0,
        stop_loss_pct=1.0,
        entry=(Condition(price, Operator.CROSSES_ABOVE, sma20),),
        exit=(Condition(price, Operator.CROSSES_BELOW, sma20),),
    )
