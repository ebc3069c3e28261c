#!filepath: timekeeper/observability/formatting.py
import math


def format_elapsed(seconds: float) -> str:
    """
    秒数 → "HH:MM:SS.ff"

    - 百分之一秒截断（不四舍五入），运行中的计时器显示值不会倒退
    - 小时为累计小时数，不按天折叠；超过 99 小时时位数自然变多
    - 负数（时钟抖动）按 0 处理
    """
    if seconds < 0 or math.isnan(seconds):
        seconds = 0.0

    # round(…, 6)：避免 0.57 * 100 == 56.99999999999999 这类浮点误差
    hundredths = int(round(seconds * 100, 6))
    whole, ff = divmod(hundredths, 100)
    minutes, ss = divmod(whole, 60)
    hh, mm = divmod(minutes, 60)

    return f"{hh:02d}:{mm:02d}:{ss:02d}.{ff:02d}"
