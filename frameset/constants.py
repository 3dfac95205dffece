"""Constants for frameset save and restore."""

# Frameset document format version
FRAMESET_VERSION = 1

# Frame attributes owned by frameset
ID_PARAM = "frameset--id"
MINI_PARAM = "frameset--mini"
TEXT_PIXEL_WIDTH_PARAM = "frameset--text-pixel-width"
TEXT_PIXEL_HEIGHT_PARAM = "frameset--text-pixel-height"

# Reserved property keys for the producing application
APP_PROPERTY = ":app"
NAME_PROPERTY = ":name"
DESCRIPTION_PROPERTY = ":desc"

# Prefix for attributes shelved while a frame lives on a text terminal
DEFAULT_SHELVE_PREFIX = "GUI"

# Placeholder colors used by text terminals
UNSPECIFIED_COLORS = frozenset({"unspecified-fg", "unspecified-bg"})

# Visibility values meaning "iconified"
ICONIFIED_VALUES = frozenset({"icon", "iconified"})

# Attributes passed to the host when a frame is created; the last two
# cannot be changed once the frame exists
INITIAL_PARAMS = ("left", "top", "width", "height", "border-width", "minibuffer")
CREATION_ONLY_PARAMS = frozenset({"minibuffer", "border-width"})

# Attributes applied after the frame is placed
FINISHING_PARAMS = ("visibility", "fullscreen")
