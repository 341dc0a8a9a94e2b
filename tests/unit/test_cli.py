"""Unit tests for CLI functionality."""

import json

import numpy as np
import pytest
from click.testing import CliRunner
from PIL import Image


class TestRenderHelpers:

    @pytest.mark.unit
    def test_normalize(self):
        from pynoisey.cli.render_commands import normalize

        out = normalize(np.array([[-1.0, 0.0], [1.0, 3.0]]))
        np.testing.assert_allclose(out, [[0.0, 0.25], [0.5, 1.0]])

    @pytest.mark.unit
    def test_normalize_constant(self):
        from pynoisey.cli.render_commands import normalize

        assert np.all(normalize(np.full((2, 3), 4.0)) == 0.0)

    @pytest.mark.unit
    def test_ascii_shades(self):
        from pynoisey.cli.render_commands import ASCII_SHADES, to_ascii

        text = to_ascii(np.array([[0.0, 1.0], [0.5, 0.5]]))
        lines = text.split("\n")
        assert len(lines) == 2
        assert lines[0] == ASCII_SHADES[0] + ASCII_SHADES[-1]

    @pytest.mark.unit
    def test_unknown_colormap(self):
        from pynoisey.cli.render_commands import to_image

        with pytest.raises(ValueError, match="colormap"):
            to_image(np.zeros((2, 2)), cmap="not-a-colormap")


class TestCLIRenderCommand:
    """Test the pnz-render command."""

    @pytest.fixture
    def runner(self):
        """Provide Click test runner."""
        return CliRunner()

    @pytest.mark.unit
    def test_render_help(self, runner):
        from pynoisey.cli.render_commands import render

        result = runner.invoke(render, ["--help"])
        assert result.exit_code == 0
        assert "Render a generator from a noise JSON document" in result.output

    @pytest.mark.unit
    def test_render_requires_config(self, runner):
        from pynoisey.cli.render_commands import render

        result = runner.invoke(render, [])
        assert result.exit_code != 0

    @pytest.mark.unit
    def test_render_npy(self, runner, sample_config_file, tmp_path):
        from pynoisey.cli.render_commands import render

        out = tmp_path / "values.npy"
        result = runner.invoke(
            render, [str(sample_config_file), "-W", "8", "-H", "4", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        values = np.load(out)
        assert values.shape == (4, 8)
        assert "Rendered 'basic'" in result.output

    @pytest.mark.unit
    def test_render_default_output_name(self, runner, sample_config_file):
        from pynoisey.cli.render_commands import render

        result = runner.invoke(render, [str(sample_config_file), "-W", "4", "-H", "4"])
        assert result.exit_code == 0, result.output
        assert sample_config_file.with_suffix(".png").exists()

    @pytest.mark.unit
    def test_render_uint_png(self, runner, sample_config_file, tmp_path):
        from pynoisey.cli.render_commands import render

        out = tmp_path / "noise.png"
        result = runner.invoke(
            render, [str(sample_config_file), "-W", "6", "-H", "5", "--uint", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        with Image.open(out) as img:
            assert img.size == (6, 5)
            assert img.mode == "L"

    @pytest.mark.unit
    def test_render_colormap(self, runner, sample_config_file, tmp_path):
        from pynoisey.cli.render_commands import render

        out = tmp_path / "color.png"
        result = runner.invoke(
            render, [str(sample_config_file), "-W", "6", "-H", "5", "--cmap", "viridis", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        with Image.open(out) as img:
            assert img.mode == "RGB"

    @pytest.mark.unit
    def test_render_ascii(self, runner, sample_config_file):
        from pynoisey.cli.render_commands import render

        result = runner.invoke(
            render, [str(sample_config_file), "-W", "12", "-H", "3", "--bounds", "0", "0", "3", "3", "--ascii"]
        )
        assert result.exit_code == 0, result.output
        rows = result.output.rstrip("\n").split("\n")
        assert len(rows) == 3
        assert all(len(row) == 12 for row in rows)

    @pytest.mark.unit
    def test_render_unknown_generator(self, runner, sample_config_file):
        from pynoisey.cli.render_commands import render

        result = runner.invoke(render, [str(sample_config_file), "-g", "nope", "--ascii"])
        assert result.exit_code == 1
        assert "nope" in result.output

    @pytest.mark.unit
    def test_render_bad_config(self, runner, tmp_path):
        from pynoisey.cli.render_commands import render

        path = tmp_path / "bad.json"
        path.write_text(json.dumps({
            "Sources": {"a": {"SourceType": "worley"}},
        }), encoding="utf-8")
        result = runner.invoke(render, [str(path), "--ascii"])
        assert result.exit_code == 1
        assert "worley" in result.output

    @pytest.mark.unit
    def test_render_3d_generator_rejected(self, runner, tmp_path):
        from pynoisey.cli.render_commands import render

        path = tmp_path / "volume.json"
        path.write_text(json.dumps({
            "Seeds": {"s": 1},
            "Sources": {"p": {"SourceType": "perlin3d", "Seed": "s"}},
            "Generators": {"g": {"GeneratorType": "fBm3d", "Sources": ["p"]}},
        }), encoding="utf-8")
        result = runner.invoke(render, [str(path), "-g", "g", "--ascii"])
        assert result.exit_code == 1
        assert "not a 2D field" in result.output

    @pytest.mark.unit
    def test_render_seed_offset(self, runner, sample_config_file, tmp_path):
        from pynoisey.cli.render_commands import render

        outputs = []
        for offset in ("0", "0", "3"):
            out = tmp_path / f"v{len(outputs)}.npy"
            result = runner.invoke(
                render,
                [str(sample_config_file), "-W", "8", "-H", "8", "--seed-offset", offset, "-o", str(out)],
            )
            assert result.exit_code == 0, result.output
            outputs.append(np.load(out))
        np.testing.assert_array_equal(outputs[0], outputs[1])
        assert not np.array_equal(outputs[0], outputs[2])

    @pytest.mark.unit
    @pytest.mark.parametrize("generator", [
        {"GeneratorType": "fBm2d", "Sources": ["p"], "Octaves": None},
        {"GeneratorType": "fBm2d", "Sources": ["p"], "Frequency": "fast"},
    ])
    def test_render_malformed_value(self, runner, tmp_path, generator):
        from pynoisey.cli.render_commands import render

        path = tmp_path / "malformed.json"
        path.write_text(json.dumps({
            "Seeds": {"s": 1},
            "Sources": {"p": {"SourceType": "perlin2d", "Seed": "s"}},
            "Generators": {"basic": generator},
        }), encoding="utf-8")
        result = runner.invoke(render, [str(path), "--ascii"])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "invalid noise configuration" in result.output
        assert "basic" in result.output

    @pytest.mark.unit
    def test_render_list_valued_seed(self, runner, tmp_path):
        from pynoisey.cli.render_commands import render

        path = tmp_path / "seed.json"
        path.write_text(json.dumps({
            "Seeds": {"Default": 1},
            "Sources": {"p": {"SourceType": "perlin2d", "Seed": ["Default"]}},
            "Generators": {"basic": {"GeneratorType": "fBm2d", "Sources": ["p"]}},
        }), encoding="utf-8")
        result = runner.invoke(render, [str(path), "--ascii"])
        assert result.exit_code == 1
        assert "Seed" in result.output
