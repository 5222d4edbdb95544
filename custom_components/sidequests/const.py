"""Constants for the Daily Side Quests integration."""
DOMAIN = "sidequests"
PLATFORMS = ["sensor", "todo"]

CONF_USE_TODO = "use_todo"

STORAGE_VERSION = 1
STORAGE_KEY = f"{DOMAIN}.data"

# Keys inside the persisted key-value document
KEY_CATEGORIES = "enabledCategories"
KEY_TEMPLATES = "questTemplates"
KEY_DAILY_QUESTS = "dailyQuests"
KEY_USER_PROGRESS = "userProgress"

# Leveling curve: xp(level) = BASE_XP_PER_LEVEL * (level - 1) ** 2
BASE_XP_PER_LEVEL = 100

# Streak length -> bonus percent; anything longer gets MAX_STREAK_BONUS_PERCENT
STREAK_BONUS_PERCENT = {0: 0, 1: 5, 2: 10, 3: 15, 4: 20, 5: 30, 6: 40}
MAX_STREAK_BONUS_PERCENT = 50

# (exclusive upper level bound, title)
LEVEL_TITLES = [
    (5, "Novice Adventurer"),
    (10, "Apprentice Quester"),
    (20, "Journeyman Hero"),
    (35, "Seasoned Champion"),
    (50, "Veteran Warrior"),
    (75, "Elite Guardian"),
    (100, "Master Legend"),
]
MAX_LEVEL_TITLE = "Mythic Paragon"

MIN_DAILY_QUESTS = 3
MAX_DAILY_QUESTS = 5
MAX_PICK_ATTEMPTS = 50

# Bus events
EVENT_QUEST_COMPLETED = f"{DOMAIN}_quest_completed"
EVENT_LEVEL_UP = f"{DOMAIN}_level_up"

# Services
SERVICE_TOGGLE_QUEST = "toggle_quest"
SERVICE_ADD_TEMPLATE = "add_template"
SERVICE_UPDATE_TEMPLATE = "update_template"
SERVICE_DELETE_TEMPLATE = "delete_template"
SERVICE_TOGGLE_TEMPLATE_ACTIVE = "toggle_template_active"
SERVICE_SET_CATEGORY_ENABLED = "set_category_enabled"
