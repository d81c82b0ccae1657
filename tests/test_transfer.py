"""Tests for pouring from bottles and between vessels."""
import pytest

from barkeep.config import EngineSettings
from barkeep.domain.ingredients import DEFAULT_CATALOG
from barkeep.engine import AimContext, EventKind, MixingEngine, PourState
from barkeep.errors import InvalidAmountError, UnknownIngredientError, VesselNotRegisteredError


def _engine(**overrides):
    return MixingEngine(settings=EngineSettings(**overrides), logger_name="barkeep.test.transfer")


def _recorder(engine):
    seen = []
    engine.subscribe(seen.append)
    return seen


def test_bottle_pour_fills_at_pour_rate():
    engine = _engine()
    engine.register_vessel("glass")
    assert engine.pour("gin_bottle", "glass", "gin", dt=1.0) == pytest.approx(30)
    assert engine.pour("gin_bottle", "glass", "gin", dt=1.0) == pytest.approx(30)
    content = engine.get_content("glass")
    assert content.volume == pytest.approx(60)
    assert content.ingredient_ids == ["gin"]
    assert content.color == DEFAULT_CATALOG.require("gin").color


def test_pour_rate_is_configurable():
    engine = _engine(pour_rate=10)
    engine.register_vessel("glass")
    assert engine.pour("rum_bottle", "glass", "rum", dt=2.0) == pytest.approx(20)


def test_pour_stops_when_destination_is_full():
    engine = _engine()
    seen = _recorder(engine)
    engine.register_vessel("glass", capacity=100)
    assert engine.pour("vodka_bottle", "glass", "vodka", dt=4.0) == pytest.approx(100)
    assert engine.is_full("glass")
    assert not engine.is_pouring("vodka_bottle")
    stopped = [e for e in seen if e.kind == EventKind.POUR_STOPPED]
    assert stopped[-1].details["reason"] == "full"
    assert engine.pour("vodka_bottle", "glass", "vodka", dt=1.0) == 0.0
    assert engine.get_content("glass").volume == pytest.approx(100)


def test_overfill_is_clamped():
    engine = _engine()
    engine.register_vessel("glass")
    engine.add_ingredient("glass", "orange_juice", 290)
    assert engine.pour("oj", "glass", "orange_juice", dt=50 / 30) == pytest.approx(10)
    assert engine.get_content("glass").volume == pytest.approx(300)


def test_zero_dt_and_self_pour_are_no_ops():
    engine = _engine()
    engine.register_vessel("glass")
    engine.add_ingredient("glass", "gin", 50)
    assert engine.pour("gin_bottle", "glass", "gin", dt=0.0) == 0.0
    assert engine.pour("glass", "glass", dt=1.0) == 0.0
    assert engine.get_content("glass").volume == pytest.approx(50)
    assert not engine.is_pouring()


def test_unknown_references_raise():
    engine = _engine()
    engine.register_vessel("glass")
    with pytest.raises(VesselNotRegisteredError):
        engine.pour("gin_bottle", "nowhere", "gin", dt=1.0)
    with pytest.raises(UnknownIngredientError):
        engine.pour("mystery_bottle", "glass", "unicorn_tears", dt=1.0)
    with pytest.raises(VesselNotRegisteredError):
        engine.pour("ghost_shaker", "glass", dt=1.0)


def test_aim_accepts_when_looking_at_a_nearby_target():
    engine = _engine()
    engine.register_vessel("glass")
    aim = AimContext.of((0, 0, 0), (0, 0, 1), (0, 0, 1))
    assert aim.alignment == pytest.approx(1.0)
    assert engine.pour("gin_bottle", "glass", "gin", dt=1.0, aim=aim) == pytest.approx(30)


@pytest.mark.parametrize(
    "aim",
    [
        AimContext.of((0, 0, 0), (1, 0, 0), (0, 0, 1)),
        AimContext.of((0, 0, 0), (0, 0, 1), (0, 0, 2)),
        AimContext.of((0, 0, 0), (0, 1, 1), (0, 0, 1)),
    ],
)
def test_aim_rejects_misaligned_or_distant_targets(aim):
    engine = _engine()
    engine.register_vessel("glass")
    assert engine.pour("gin_bottle", "glass", "gin", dt=1.0, aim=aim) == 0.0
    assert engine.get_content("glass").is_empty()
    assert not engine.is_pouring("gin_bottle")


def test_aim_distance_uses_source_position_when_given():
    engine = _engine()
    engine.register_vessel("glass")
    aim = AimContext.of((0, 0, 0), (0, 0, 1), (0, 0, 2.5), source_position=(0, 0, 1.5))
    assert aim.distance == pytest.approx(1.0)
    assert engine.pour("gin_bottle", "glass", "gin", dt=1.0, aim=aim) == pytest.approx(30)


def test_vessel_to_vessel_pour_keeps_proportions():
    engine = _engine()
    engine.register_vessel("shaker", capacity=500)
    engine.register_vessel("glass", capacity=300)
    engine.add_ingredient("shaker", "gin", 300)
    engine.add_ingredient("shaker", "vermouth_dry", 100)

    moved = engine.pour("shaker", "glass", dt=400 / 30)

    assert moved == pytest.approx(300)
    glass = engine.get_content("glass")
    shaker = engine.get_content("shaker")
    assert glass.amount_of("gin") == pytest.approx(225)
    assert glass.amount_of("vermouth_dry") == pytest.approx(75)
    assert shaker.amount_of("gin") == pytest.approx(75)
    assert shaker.amount_of("vermouth_dry") == pytest.approx(25)
    assert engine.is_full("glass")
    assert not engine.is_pouring("shaker")


def test_vessel_to_vessel_pour_conserves_volume():
    engine = _engine()
    engine.register_vessel("shaker", capacity=500)
    engine.register_vessel("glass", capacity=300)
    engine.add_ingredient("shaker", "rum", 60)
    engine.add_ingredient("shaker", "lime_juice", 25)
    engine.add_ingredient("shaker", "simple_syrup", 15)

    for _ in range(10):
        engine.pour("shaker", "glass", dt=0.1)

    total = engine.get_content("shaker").volume + engine.get_content("glass").volume
    assert total == pytest.approx(100)
    assert engine.identify(engine.get_content("glass")) == "Daiquiri"


def test_pour_from_empty_vessel_moves_nothing():
    engine = _engine()
    engine.register_vessel("shaker")
    engine.register_vessel("glass")
    assert engine.pour("shaker", "glass", dt=1.0) == 0.0
    assert not engine.is_pouring("shaker")


def test_pour_session_lifecycle_events():
    engine = _engine()
    seen = _recorder(engine)
    engine.register_vessel("glass")
    assert engine.transfer.state("gin_bottle") == PourState.IDLE

    engine.pour("gin_bottle", "glass", "gin", dt=0.5)
    engine.pour("gin_bottle", "glass", "gin", dt=0.5)
    assert engine.transfer.state("gin_bottle") == PourState.POURING
    assert engine.stop_pour("gin_bottle") == 1
    assert engine.transfer.state("gin_bottle") == PourState.IDLE

    kinds = [e.kind for e in seen]
    assert kinds == [EventKind.POUR_STARTED, EventKind.POUR_STOPPED]
    assert seen[1].details["poured"] == pytest.approx(30)
    assert seen[1].details["reason"] == "released"


def test_stop_pour_when_idle_is_a_no_op():
    engine = _engine()
    assert engine.stop_pour("gin_bottle") == 0
    assert engine.stop_pour() == 0


def test_stop_pour_without_source_stops_everything():
    engine = _engine()
    engine.register_vessel("glass_a")
    engine.register_vessel("glass_b")
    engine.pour("gin_bottle", "glass_a", "gin", dt=0.5)
    engine.pour("tonic_bottle", "glass_b", "tonic_water", dt=0.5)
    assert engine.is_pouring()
    assert engine.stop_pour() == 2
    assert not engine.is_pouring()


def test_retargeting_a_source_stops_the_old_session():
    engine = _engine()
    seen = _recorder(engine)
    engine.register_vessel("glass_a")
    engine.register_vessel("glass_b")
    engine.pour("gin_bottle", "glass_a", "gin", dt=0.5)
    engine.pour("gin_bottle", "glass_b", "gin", dt=0.5)

    stopped = [e for e in seen if e.kind == EventKind.POUR_STOPPED]
    assert len(stopped) == 1
    assert stopped[0].details["reason"] == "retargeted"
    assert engine.pour_progress("gin_bottle").destination == "glass_b"
    assert engine.transfer.sessions["gin_bottle"].destination == "glass_b"


def test_progress_readout_follows_the_pour():
    engine = _engine()
    engine.register_vessel("glass", capacity=200)
    engine.pour("gin_bottle", "glass", "gin", dt=1.0)
    progress = engine.pour_progress("gin_bottle")
    assert progress.active
    assert progress.poured == pytest.approx(30)
    assert progress.fill_fraction == pytest.approx(0.15)
    assert progress.poured_fraction == pytest.approx(0.15)


def test_progress_hidden_after_grace_period():
    engine = _engine()
    seen = _recorder(engine)
    engine.register_vessel("glass")
    engine.pour("gin_bottle", "glass", "gin", dt=1.0)
    engine.stop_pour("gin_bottle")

    progress = engine.pour_progress("gin_bottle")
    assert progress is not None
    assert not progress.active

    engine.scheduler.advance(4.9)
    assert engine.pour_progress("gin_bottle") is not None
    engine.scheduler.advance(0.2)
    assert engine.pour_progress("gin_bottle") is None
    assert seen[-1].kind == EventKind.PROGRESS_HIDDEN


def test_resuming_within_grace_period_keeps_progress():
    engine = _engine()
    engine.register_vessel("glass")
    engine.pour("gin_bottle", "glass", "gin", dt=1.0)
    engine.stop_pour("gin_bottle")
    engine.scheduler.advance(3.0)

    engine.pour("gin_bottle", "glass", "gin", dt=1.0)
    engine.scheduler.advance(3.0)

    progress = engine.pour_progress("gin_bottle")
    assert progress is not None
    assert progress.active
    assert progress.destination_volume == pytest.approx(60)


def test_full_shaker_into_smaller_glass():
    engine = _engine()
    engine.register_vessel("shaker", capacity=500)
    engine.register_vessel("glass", capacity=300)
    engine.add_ingredient("shaker", "vodka", 300)
    engine.add_ingredient("shaker", "orange_juice", 200)
    assert engine.is_full("shaker")

    moved = engine.pour("shaker", "glass", dt=400 / 30)

    assert moved == pytest.approx(300)
    shaker = engine.get_content("shaker")
    assert shaker.volume == pytest.approx(200)
    assert shaker.amount_of("vodka") == pytest.approx(120)
    assert shaker.amount_of("orange_juice") == pytest.approx(80)
    assert engine.get_content("glass").volume == pytest.approx(300)


@pytest.mark.parametrize("dt", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_time_step_is_rejected(dt):
    engine = _engine()
    engine.register_vessel("glass")
    with pytest.raises(InvalidAmountError):
        engine.pour("gin_bottle", "glass", "gin", dt=dt)
    content = engine.get_content("glass")
    assert content.is_empty()
    assert 0 <= content.volume <= content.capacity
    assert not engine.is_pouring()
