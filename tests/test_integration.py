"""End-to-end rendering of the demo scene."""

import numpy as np

BACKGROUND = np.array([0.2, 0.7, 0.8], dtype=np.float32)


class TestDemoRender:
    """Tests rendering the full demo scene at low resolution."""

    def test_demo_scene_is_valid_image(self):
        from whitted.core.integrator import render
        from whitted.scene.presets import create_demo_scene

        framebuffer = render(create_demo_scene(), 64, 48)
        pixels = framebuffer.pixels

        assert pixels.shape == (64 * 48, 3)
        assert np.all(np.isfinite(pixels))
        assert pixels.min() >= 0.0
        assert pixels.max() <= 1.0

        is_background = np.all(np.abs(pixels - BACKGROUND) < 1e-6, axis=1)
        assert is_background.any()
        assert not is_background.all()

    def test_secondary_rays_change_the_image(self):
        from whitted.camera.pinhole import RenderSettings
        from whitted.core.integrator import render
        from whitted.scene.presets import create_demo_scene

        full = render(create_demo_scene(), 32, 24)
        local_only = render(create_demo_scene(), 32, 24, RenderSettings(secondary_rays=False))

        assert np.abs(full.pixels - local_only.pixels).max() > 1e-3

    def test_shadows_only_darken(self):
        from whitted.camera.pinhole import RenderSettings
        from whitted.core.integrator import render
        from whitted.scene.description import Light, Material, Scene, Sphere

        grey = Material.diffuse_only((0.5, 0.5, 0.5))
        # Dim enough that tone mapping never rescales a pixel
        scene = Scene(
            spheres=[
                Sphere((0.0, 0.0, -10.0), 3.0, grey),
                Sphere((0.0, 6.0, -7.5), 1.0, grey),
            ],
            lights=[Light((0.0, 10.0, -5.0), 1.0)],
        )

        shadowed = render(scene, 32, 24)
        unshadowed = render(scene, 32, 24, RenderSettings(shadows=False))

        assert np.all(shadowed.pixels <= unshadowed.pixels + 1e-6)
        assert shadowed.pixels.sum() < unshadowed.pixels.sum()

    def test_render_is_deterministic(self):
        from whitted.core.integrator import render
        from whitted.scene.presets import create_demo_scene

        first = render(create_demo_scene(), 16, 12)
        second = render(create_demo_scene(), 16, 12)
        np.testing.assert_array_equal(first.pixels, second.pixels)

    def test_render_and_save(self, tmp_path):
        from PIL import Image

        from whitted.core.integrator import render
        from whitted.preview.export import save_image
        from whitted.scene.presets import create_demo_scene

        filepath = tmp_path / "demo.png"
        save_image(render(create_demo_scene(), 20, 10), str(filepath))

        with Image.open(filepath) as image:
            assert image.size == (20, 10)
