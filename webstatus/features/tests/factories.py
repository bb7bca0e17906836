from factory import DictFactory, Faker, LazyFunction, Sequence, SubFactory

from webstatus.webstatus_client.models import Feature


class BaselineDictFactory(DictFactory):
    status = "widely"
    low_date = "2015-07-29"
    high_date = "2018-01-29"


class SpecDictFactory(DictFactory):
    links = LazyFunction(lambda: [{"link": "https://drafts.csswg.org/css-grid/"}])


class FeatureDictFactory(DictFactory):
    feature_id = Sequence(lambda n: f"feature-{n}")
    name = Faker("catch_phrase")
    spec = SubFactory(SpecDictFactory)
    baseline = SubFactory(BaselineDictFactory)
    browser_implementations = LazyFunction(dict)
    wpt = LazyFunction(dict)


def feature_with_scores(score=0.5, status="available", version="100", **kwargs):
    """Feature payload implemented in every browser with the same stable and experimental score."""
    browsers = ("chrome", "edge", "firefox", "safari")
    kwargs.setdefault(
        "browser_implementations", {browser: {"status": status, "version": version} for browser in browsers}
    )
    kwargs.setdefault(
        "wpt",
        {
            "stable": {browser: {"score": score} for browser in browsers},
            "experimental": {browser: {"score": score} for browser in browsers},
        },
    )
    return FeatureDictFactory(**kwargs)


def build_feature(**kwargs) -> Feature:
    return Feature.build(**FeatureDictFactory(**kwargs))
