"""
nestedset.config.defaults - Default configuration values.
"""

DEFAULT_CONFIG = {
    "rebuild": {
        # Wrap every node in a classification node before indexing
        "complement": False,
        # Renumber in depth-first order and sort output by position id
        "sort": False,
        "max_unfold_passes": 8,
        "duplicate_separator": "__",
        "complement_prefix": "c__",
    },
    "input": {
        # Empty means: take it from the file extension
        "format": "",
        "fields": {
            "id": "id",
            "label": "label",
            "parent": "parent",
            "leaf": "leaf",
        },
    },
    "output": {
        # Empty means: same as the input format
        "format": "",
        "fields": {
            "pid": "pid",
            "identity": "classification",
            "label": "classification_label",
            "origin": "classification_origin",
            "parent": "classification_parent",
            "parent_id": "parent_id",
            "leaf": "leaf",
            "lft": "lft",
            "rgt": "rgt",
            "count": "count",
        },
    },
}
