"""File-based JSON storage for user settings and saved runs.

Data layout:
  data/
    config.json          User settings (preferred display locale)
    records/             Saved runs, grouped per project
      <project-slug>/
        0.json           RunRecord snapshots, indexed by file stem
        1.json

Slug rules: title → Unicode normalize → strip non-ASCII → lowercase →
replace non-alnum runs with hyphen → strip leading/trailing hyphens.

Config: get_config() returns defaults merged with stored values.
update_config() applies partial updates; unknown keys are ignored.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    records_dir,
    records_root,
    slugify,
)

from .config import (  # noqa: F401
    get_config,
    update_config,
)

from .records import (  # noqa: F401
    delete_record,
    get_record,
    list_records,
    save_record,
)
