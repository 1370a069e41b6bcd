"""
Tailwind 對照表 — 調色盤與各種斷點

全部都是模組層級的 tuple，載入一次、不可變更。
斷點表格式為 ((上限, token), ...)，由小到大比對，最後一筆為 fallback。
"""

# 宣告順序即距離相同時的優先順序
COLOR_PALETTE = (
    ("#000000", "text-black"),
    ("#ffffff", "text-white"),
    ("#ef4444", "text-red-500"),
    ("#3b82f6", "text-blue-500"),
    ("#10b981", "text-green-500"),
    ("#f59e0b", "text-yellow-500"),
    ("#6366f1", "text-indigo-500"),
    ("#8b5cf6", "text-purple-500"),
    ("#ec4899", "text-pink-500"),
    ("#6b7280", "text-gray-500"),
)

# value <= 上限
FONT_SIZES = (
    (12, "text-xs"),
    (14, "text-sm"),
    (16, "text-base"),
    (18, "text-lg"),
    (20, "text-xl"),
    (24, "text-2xl"),
    (30, "text-3xl"),
    (36, "text-4xl"),
    (48, "text-5xl"),
    (None, "text-6xl"),
)

# value < 上限
FONT_WEIGHTS = (
    (400, "font-light"),
    (500, "font-normal"),
    (600, "font-medium"),
    (700, "font-semibold"),
    (None, "font-bold"),
)

LINE_HEIGHTS = (
    (1, "leading-none"),
    (1.25, "leading-tight"),
    (1.5, "leading-normal"),
    (1.75, "leading-relaxed"),
    (None, "leading-loose"),
)

LETTER_SPACINGS = (
    (-0.05, "tracking-tighter"),
    (0, "tracking-tight"),
    (0.05, "tracking-normal"),
    (0.1, "tracking-wide"),
    (None, "tracking-wider"),
)

# px → Tailwind spacing scale
SIZE_SCALE = (
    (4, "1"),
    (8, "2"),
    (12, "3"),
    (16, "4"),
    (20, "5"),
    (24, "6"),
    (32, "8"),
    (40, "10"),
    (48, "12"),
    (64, "16"),
    (80, "20"),
    (96, "24"),
    (128, "32"),
    (160, "40"),
    (192, "48"),
    (256, "64"),
    (320, "80"),
    (384, "96"),
    (None, "full"),
)

CORNER_RADII = (
    (2, "rounded-sm"),
    (4, "rounded"),
    (6, "rounded-md"),
    (8, "rounded-lg"),
    (12, "rounded-xl"),
    (16, "rounded-2xl"),
    (24, "rounded-3xl"),
    (None, "rounded-full"),
)

STROKE_WEIGHTS = (
    (1, "border"),
    (2, "border-2"),
    (4, "border-4"),
    (None, "border-8"),
)

# (最大 offset.y, 最大 radius, token)；shadow-sm 另外要求 offset 為 (0, 1)
SHADOW_SM = (1, 2, "shadow-sm")
SHADOW_TIERS = (
    (3, 4, "shadow"),
    (8, 10, "shadow-md"),
    (15, 15, "shadow-lg"),
)
SHADOW_FALLBACK = "shadow-xl"

# 標題層級：fontSize >= 下限
HEADING_LEVELS = (
    (32, 1),
    (24, 2),
    (20, 3),
    (18, 4),
    (16, 5),
)
DEFAULT_HEADING_LEVEL = 6
HEADING_FONT_SIZE_MIN = 16


def lookup_le(table: tuple, value: float) -> str:
    """回傳第一個 value <= 上限 的 token."""
    for limit, token in table:
        if limit is None or value <= limit:
            return token
    return table[-1][1]


def lookup_lt(table: tuple, value: float) -> str:
    """回傳第一個 value < 上限 的 token."""
    for limit, token in table:
        if limit is None or value < limit:
            return token
    return table[-1][1]
