import pytest

from pico_abtest.variants import CrawlerVariant, RealUserVariant, chosen_version, should_render


class TestRealUserVariant:
    @pytest.fixture
    def variant(self):
        return RealUserVariant(versions=("a", "b", "c"), version="b")

    def test_renders_assigned_version(self, variant):
        assert should_render(variant, ["b"], False) is True
        assert should_render(variant, ["a", "b"], False) is True

    def test_does_not_render_other_versions(self, variant):
        assert should_render(variant, ["a"], False) is False
        assert should_render(variant, ["a", "c"], False) is False
        assert should_render(variant, [], False) is False

    def test_never_renders_on_crawler_path(self, variant):
        assert should_render(variant, ["b"], True) is False
        assert should_render(variant, ["a", "b", "c"], True) is False

    def test_version_must_belong_to_versions(self):
        with pytest.raises(ValueError):
            RealUserVariant(versions=("a", "b"), version="z")

    def test_is_immutable(self, variant):
        with pytest.raises(AttributeError):
            variant.version = "a"


class TestCrawlerVariant:
    def test_renders_designated_version_for_crawlers(self):
        variant = CrawlerVariant("b")
        assert should_render(variant, ["b"], True) is True
        assert should_render(variant, ["a"], True) is False

    def test_never_renders_on_real_user_path(self):
        variant = CrawlerVariant("b")
        assert should_render(variant, ["b"], False) is False

    def test_without_designated_version_renders_nothing(self):
        variant = CrawlerVariant()
        assert should_render(variant, ["a", "b"], True) is False
        assert should_render(variant, ["a", "b"], False) is False


class TestDispatch:
    def test_unknown_variant_type_rejected(self):
        with pytest.raises(TypeError):
            should_render(object(), ["a"], False)

    def test_chosen_version(self):
        assert chosen_version(RealUserVariant(("a", "b"), "a")) == "a"
        assert chosen_version(CrawlerVariant("b")) == "b"
        assert chosen_version(CrawlerVariant()) is None

    def test_chosen_version_unknown_type(self):
        with pytest.raises(TypeError):
            chosen_version("a")
