import pytest

from ornament_sway import AssetLoadError, SceneController, Viewport, compose_frame
from ornament_sway import scene as scene_module
from ornament_sway.bounds import ImageBounds
from ornament_sway.render import ChainDraw, ImageDraw, LightDraw, attach_offsets


def test_tick_before_load_is_inert(scene_config):
    ctl = SceneController(scene_config, Viewport(1280, 720))
    assert ctl.tick(16.0) is False
    assert ctl.context.frame == 0
    assert compose_frame(ctl.context).items == []


def test_missing_asset_is_fatal(scene_config, festive_images):
    del festive_images["kendy"]
    ctl = SceneController(scene_config, Viewport(1280, 720))
    with pytest.raises(AssetLoadError, match="kendy"):
        ctl.load(festive_images, now=0.0)
    assert not ctl.ready


def test_load_builds_entities(loaded_controller):
    ctx = loaded_controller.context
    assert ctx.ready
    assert len(ctx.ornaments) == 11
    assert len(ctx.lights) == 102
    assert ctx.bounds["top_line"] == ImageBounds(0, 30, 599, 49)
    assert ctx.bounds["sock1"] == ImageBounds(12, 12, 51, 51)


def test_anchors_follow_line_edges(loaded_controller):
    ctx = loaded_controller.context
    flake = ctx.ornament("flake_short")
    assert flake.anchor.x == pytest.approx(640.0 + 108.0)
    assert flake.anchor.y == pytest.approx(40.0 + 49.0 - 12.0)
    leaves = ctx.ornament("leaves_right")
    assert leaves.anchor.x == pytest.approx(640.0 + 96.0 - 1.0)
    assert leaves.anchor.y == pytest.approx(40.0 + 30.0 + 114.0)
    cherry = ctx.ornament("cherry_right")
    assert cherry.anchor.x == pytest.approx(640.0 + 144.0 - 145.0)


def test_ornaments_are_tagged(loaded_controller):
    ctx = loaded_controller.context
    kinds = {orn.name: (orn.kind, orn.motion) for orn in ctx.ornaments}
    assert kinds["flake_long"] == ("snowflake", "pendulum")
    assert kinds["leaves_left"] == ("leaves", "sway")
    assert kinds["cherry_left"] == ("cherry", "static")
    assert kinds["figure_right"] == ("figure", "pendulum")
    assert ctx.ornament("flake_long").charm.image_key == "snowflake3"


def test_tick_caps_elapsed_time(loaded_controller, monkeypatch):
    seen = []
    real = scene_module.step_spin

    def spy(spin, dt, now, rng, cfg=None):
        seen.append(dt)
        real(spin, dt, now, rng, cfg)

    monkeypatch.setattr(scene_module, "step_spin", spy)
    loaded_controller.tick(10.0)
    loaded_controller.tick(10_000.0)
    loaded_controller.tick(9_000.0)
    assert seen == [pytest.approx(0.010), pytest.approx(0.032), 0.0]


def test_angles_stay_capped_over_many_ticks(loaded_controller):
    ctx = loaded_controller.context
    now = 0.0
    for _ in range(1500):
        now += 16.7
        loaded_controller.tick(now)
        for orn in ctx.ornaments:
            if orn.motion != "static":
                assert abs(orn.angle) <= orn.angle_cap
    assert ctx.frame == 1500


def test_viewport_change_keeps_physics_state(loaded_controller):
    ctx = loaded_controller.context
    for i in range(1, 60):
        loaded_controller.tick(i * 16.0)
    state = [(o.angle, o.angular_velocity) for o in ctx.ornaments]
    anchors = [(o.anchor.x, o.anchor.y) for o in ctx.ornaments]
    lights = ctx.lights

    loaded_controller.on_viewport_change(800, 600, now=960.0)

    assert [(o.angle, o.angular_velocity) for o in ctx.ornaments] == state
    for orn, (x, y) in zip(ctx.ornaments, anchors):
        assert orn.anchor.x == pytest.approx(x - 240.0)
        assert orn.anchor.y == y
    assert ctx.lights is not lights
    assert len(ctx.lights) == 6 * 11


def test_same_seed_is_deterministic(scene_config, festive_images):
    runs = []
    for _ in range(2):
        ctl = SceneController(scene_config, Viewport(1024, 768))
        ctl.load(festive_images, now=0.0)
        for i in range(1, 200):
            ctl.tick(i * 16.0)
        runs.append([(o.angle, o.angular_velocity) for o in ctl.context.ornaments])
    assert runs[0] == runs[1]


def test_compose_frame_order_and_contents(loaded_controller):
    ctx = loaded_controller.context
    loaded_controller.tick(16.0)
    frame = compose_frame(ctx)

    first, second = frame.items[0], frame.items[1]
    assert (first.image_key, first.x, first.y) == ("top_line", 340.0, 40.0)
    assert second.image_key == "icicles"

    chains = frame.of_type(ChainDraw)
    images = frame.of_type(ImageDraw)
    lights = frame.of_type(LightDraw)
    assert len(chains) == 7
    assert len(images) == 2 + 11 + 1
    visible = [light for light in ctx.lights if light.glow >= 0.02]
    assert len(lights) == 2 * len(visible)

    charm = [img for img in images if img.image_key == "snowflake3"][0]
    assert charm.rotation == ctx.spin.angle

    first_light = max(i for i, item in enumerate(frame.items) if isinstance(item, LightDraw))
    first_ornament = min(i for i, item in enumerate(frame.items) if isinstance(item, ChainDraw))
    assert first_light < first_ornament


def test_hanging_image_is_drawn_at_bob(loaded_controller):
    ctx = loaded_controller.context
    frame = compose_frame(ctx)
    sock = ctx.ornament("sock_center")
    bob = sock.bob()
    draw = [img for img in frame.of_type(ImageDraw) if img.image_key == "sock1"][0]
    assert (draw.x, draw.y) == (bob.x, bob.y)
    # 64 px sprite, opaque 12..51, scale 0.8
    assert draw.pivot_x == pytest.approx(31.5 / 64 * 51.2)
    assert draw.pivot_y == pytest.approx(12 / 64 * 51.2)


def test_attach_offsets_modes():
    b = ImageBounds(12, 12, 51, 51)
    assert attach_offsets(b, 64, 64, 0.5, "center") == (32.0, 32.0, 15.75, 15.75)
    assert attach_offsets(b, 64, 64, 0.5, "top_center") == (32.0, 32.0, 15.75, 6.0)
    assert attach_offsets(b, 64, 64, 0.5, "top_left") == (32.0, 32.0, 6.0, 6.0)
    assert attach_offsets(None, 64, 64, 0.5, "center") == (32.0, 32.0, 16.0, 16.0)


def test_angles_within_cap_right_after_load(scene_config, festive_images):
    for seed in range(20):
        scene_config.sim.seed = seed
        ctl = SceneController(scene_config, Viewport(1280, 720))
        ctl.load(festive_images, now=0.0)
        for orn in ctl.context.ornaments:
            if orn.params is not None:
                assert abs(orn.angle) <= orn.angle_cap


def test_load_and_viewport_change_need_the_clock(scene_config, festive_images):
    ctl = SceneController(scene_config, Viewport(1280, 720))
    with pytest.raises(TypeError):
        ctl.load(festive_images)
    ctl.load(festive_images, now=5000.0)
    assert ctl.context.last_time == 5000.0
    assert all(light.next_switch >= 5000.0 for light in ctl.context.lights)

    with pytest.raises(TypeError):
        ctl.on_viewport_change(800, 600)
    ctl.on_viewport_change(800, 600, now=9000.0)
    assert all(light.next_switch >= 9000.0 for light in ctl.context.lights)
