CLICK_TO_SORT_ATTR = {"th": {"title": "Click to sort"}}

DEFAULT_PAGE_SIZE = 25
PAGE_SIZE_OPTIONS = [25, 50, 100]


def merge_attrs(*dicts):
    merged = {}
    for d in dicts:
        for key, val in d.items():
            merged.setdefault(key, {}).update(val)
    return merged


def get_validated_page_size(value):
    try:
        page_size = int(value if value is not None else DEFAULT_PAGE_SIZE)
        return page_size if page_size in PAGE_SIZE_OPTIONS else DEFAULT_PAGE_SIZE
    except (ValueError, TypeError):
        return DEFAULT_PAGE_SIZE


def get_validated_offset(value):
    try:
        return max(int(value), 0)
    except (ValueError, TypeError):
        return 0
