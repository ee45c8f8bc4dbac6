import sys
from pathlib import Path

# Determine project root (one level up from tests/)
ROOT = Path(__file__).resolve().parents[1]

# Add project root (for imports like 'import config' and 'import adminsite')
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Disable logging during tests
from config import LogConfig
LogConfig.ENABLED = False
