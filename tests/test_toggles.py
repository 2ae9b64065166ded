import pytest

from togglebench.toggles import (
    COLLECTIONS,
    UnknownScenarioError,
    build_scenarios,
    get_scenario,
    is_member,
    scenario_names,
)

ALL_SCENARIOS = scenario_names()


class TestSetToggle:
    def test_single_toggle_adds_missing_key(self) -> None:
        container = {"1", "2", "3"}
        get_scenario("set").toggle(container, "55")
        assert "55" in container

    def test_double_toggle_restores_membership(self) -> None:
        scenario = get_scenario("set")
        container = {"1", "2", "3"}
        history = [is_member(container, "55")]
        for _ in range(2):
            scenario.toggle(container, "55")
            history.append(is_member(container, "55"))
        assert history == [False, True, False]
        assert container == {"1", "2", "3"}


@pytest.mark.parametrize("name", ALL_SCENARIOS)
class TestEveryScenario:
    def test_toggle_flips_membership(self, name: str) -> None:
        scenario = get_scenario(name)
        container = scenario.build(100, key="55", present=False)
        scenario.toggle(container, "55")
        assert is_member(container, "55")
        scenario.toggle(container, "55")
        assert not is_member(container, "55")

    def test_double_toggle_restores_container(self, name: str) -> None:
        scenario = get_scenario(name)
        container = scenario.build(20, key="500")
        before = type(container)(container)
        toggle = scenario.bind(container, "500")
        toggle()
        toggle()
        assert container == before

    def test_other_keys_untouched(self, name: str) -> None:
        scenario = get_scenario(name)
        container = scenario.build(10)
        scenario.toggle(container, "3")
        assert not is_member(container, "3")
        assert all(is_member(container, str(value)) for value in range(10) if value != 3)

    def test_build_forces_key_present(self, name: str) -> None:
        scenario = get_scenario(name)
        assert is_member(scenario.build(10, key="55", present=True), "55")
        assert not is_member(scenario.build(100, key="55", present=False), "55")

    def test_collection_type(self, name: str) -> None:
        scenario = get_scenario(name)
        assert scenario.collection in COLLECTIONS
        assert type(scenario.build(5)).__name__ == scenario.collection


class TestCatalog:
    def test_names_are_unique(self) -> None:
        assert len(ALL_SCENARIOS) == len(set(ALL_SCENARIOS))

    def test_build_scenarios_covers_every_collection(self) -> None:
        assert {s.collection for s in build_scenarios()} == set(COLLECTIONS)

    def test_unknown_scenario(self) -> None:
        with pytest.raises(UnknownScenarioError) as excinfo:
            get_scenario("tuple")
        assert isinstance(excinfo.value, KeyError)
        assert "tuple" in str(excinfo.value)
        assert "set-xor" in str(excinfo.value)

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            get_scenario("list").build(-1)

    def test_bind_returns_nullary_callable(self) -> None:
        container: list[str] = []
        toggle = get_scenario("list").bind(container)
        toggle()
        assert container == ["55"]
