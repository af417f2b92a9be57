"""Event vocabulary shared by the store and its observers."""

from typing import Final

REFRESH: Final = "refresh"
ERROR: Final = "error"
BEFORE_SAVE: Final = "beforeSave"
SAVE: Final = "save"
BEFORE_CREATE: Final = "beforeCreate"
CREATE: Final = "create"
BEFORE_UPDATE: Final = "beforeUpdate"
UPDATE: Final = "update"
BEFORE_DESTROY: Final = "beforeDestroy"
DESTROY: Final = "destroy"
CHANGE: Final = "change"
UNBIND: Final = "unbind"

LIFECYCLE_EVENTS: Final = (
    REFRESH,
    ERROR,
    BEFORE_SAVE,
    SAVE,
    BEFORE_CREATE,
    CREATE,
    BEFORE_UPDATE,
    UPDATE,
    BEFORE_DESTROY,
    DESTROY,
    CHANGE,
    UNBIND,
)
