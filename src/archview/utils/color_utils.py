# src/archview/utils/color_utils.py
"""
提供與顏色處理相關的公用函式。
"""

import colorsys

DARK_TEXT_COLOR = "#1f2937"
LIGHT_TEXT_COLOR = "#ffffff"


def _hex_to_rgb(hex_color: str) -> tuple[float, float, float]:
    hex_color = hex_color.lstrip("#")
    r, g, b = tuple(int(hex_color[i : i + 2], 16) for i in (0, 2, 4))
    return r / 255.0, g / 255.0, b / 255.0


def get_analogous_dark_color(hex_color: str) -> str:
    """
    根據給定的十六進位背景色，計算一個相似的、更深的、醒目的邊框顏色。

    Args:
        hex_color: 十六進位顏色字串 (例如 "#RRGGBB")。

    Returns:
        一個相似深色的十六進位顏色字串。
    """
    hue, lightness, saturation = colorsys.rgb_to_hls(*_hex_to_rgb(hex_color))

    dark_l = max(0.1, lightness * 0.3)
    dark_s = min(1.0, saturation * 1.2)

    cr, cg, cb = colorsys.hls_to_rgb(hue, dark_l, dark_s)

    return f"#{int(cr * 255):02x}{int(cg * 255):02x}{int(cb * 255):02x}"


def get_contrast_text_color(hex_color: str) -> str:
    """依背景色的亮度選擇深色或淺色文字。"""
    _, lightness, _ = colorsys.rgb_to_hls(*_hex_to_rgb(hex_color))
    return DARK_TEXT_COLOR if lightness > 0.5 else LIGHT_TEXT_COLOR
