"""对战常量

集中管理种族 / 稀有度等魔法字符串，避免硬编码分散在各个效果中。
"""

# ==================== 棋盘 ====================

LANE_COUNT = 4
DEFAULT_START_HEALTH = 30

# ==================== 种族 ====================

RACE_DEMON = "恶魔"
RACE_MONSTER = "怪物"
RACE_ARMY = "军队"
RACE_CIVILIAN = "平民"
RACE_SKELETON = "骷髅"
RACE_SPELL = "法术"
RACE_TREASURE = "奇珍"
RACE_FOREST = "森林"
RACE_BUILDING = "建筑"
RACE_NOBLE = "贵族"
RACE_CRIMINAL = "罪犯"

# ==================== 稀有度 ====================

# 卡牌数据中的稀有度取值（英文小写）
RARITY_COMMON = "common"
RARITY_RARE = "rare"
RARITY_EPIC = "epic"
RARITY_LEGENDARY = "legendary"

# ==================== 地狱领主 ====================

HELL_LORD_BUFF = 3
HELL_LORD_DEMON_BUFF = 4
HELL_LORD_DEBUFF = 3
