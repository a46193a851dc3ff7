import os


ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_DIR = os.environ.get("MBOXLENS_CONFIG_DIR") or os.path.join(ROOT_DIR, "mbox_config")
SETTINGS_FILE = os.path.join(CONFIG_DIR, "settings.json")
