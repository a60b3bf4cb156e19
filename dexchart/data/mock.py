"""模拟 K 线生成器

在真实行情接口接入前，为图表与指标计算提供合成数据。
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .models import Bar


def generate_mock_bars(
    count: int = 100,
    base_price: float = 2500.0,
    volatility: float = 50.0,
    interval: timedelta = timedelta(hours=1),
    end: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> List[Bar]:
    """生成围绕基准价随机波动的 K 线

    开收盘价在 base_price ± volatility/2 内均匀分布，
    影线在实体外再延伸至多 volatility/2。

    Args:
        count: K 线数量
        base_price: 基准价
        volatility: 波动幅度
        interval: K 线间隔，默认 1 小时
        end: 最后一根 K 线的时间，默认当前 UTC 时间
        seed: 随机种子，便于复现

    Returns:
        按时间升序排列的 K 线列表
    """
    if count < 0:
        raise ValueError(f"数量必须 >= 0, 当前值: {count}")

    rng = random.Random(seed)
    end = end or datetime.now(timezone.utc)

    bars = []
    for i in range(count):
        timestamp = end - (count - 1 - i) * interval
        open_ = base_price + (rng.random() - 0.5) * volatility
        close = base_price + (rng.random() - 0.5) * volatility
        high = max(open_, close) + rng.random() * volatility * 0.5
        low = min(open_, close) - rng.random() * volatility * 0.5
        volume = rng.random() * 1000

        bars.append(Bar(
            timestamp=timestamp.isoformat(),
            open=open_,
            high=high,
            low=low,
            close=close,
            volume=volume,
        ))

    return bars
