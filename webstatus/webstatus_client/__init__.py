from .main import (  # noqa: F401
    WebStatusAPIError,
    get_feature,
    list_features,
    list_missing_one_implementation_counts,
)
