"""
Integration tests for basic pynoisey workflows.

These tests verify that documents, sources, modules and the grid builder
work together end to end.
"""
import numpy as np
import pytest


class TestDocumentToGridWorkflow:
    """Load a document, assemble it and sample it onto a grid."""

    @pytest.mark.integration
    def test_basic_document_workflow(self, sample_config_file):
        import pynoisey as pnz

        bank = pnz.NoiseJSON.load(sample_config_file)
        bank.build_sources()
        bank.build_generators()

        builder = pnz.Builder2D(bank.get_generator("basic"), 32, 16, pnz.Builder2DBounds(0, 0, 3, 1.5))
        values = builder.build()
        vmin, vmax = builder.get_min_max()

        assert values.shape == (16, 32)
        assert np.all(np.isfinite(values))
        assert vmin < vmax
        assert vmin == values.min() and vmax == values.max()

    @pytest.mark.integration
    def test_workflow_is_reproducible(self, sample_document):
        import pynoisey as pnz

        grids = []
        for _ in range(2):
            bank = pnz.NoiseJSON.from_dict(sample_document)
            bank.build_sources()
            bank.build_generators()
            grids.append(pnz.Builder2D(bank.get_generator("basic"), 16, 16).build())
        np.testing.assert_array_equal(grids[0], grids[1])

    @pytest.mark.integration
    def test_saved_document_rebuilds_identically(self, sample_document, tmp_path):
        import pynoisey as pnz

        bank = pnz.NoiseJSON.from_dict(sample_document)
        path = tmp_path / "copy.json"
        bank.save(path)

        grids = []
        for b in (bank, pnz.NoiseJSON.load(path)):
            b.build_sources()
            b.build_generators()
            grids.append(pnz.Builder2D(b.get_generator("basic"), 8, 8).build())
        np.testing.assert_array_equal(grids[0], grids[1])


class TestComposedGraphWorkflow:
    """Nested module graphs built by hand and from a document agree."""

    TERRAIN = {
        "Seeds": {"Land": 11, "Sea": 12},
        "Sources": {
            "hills": {"SourceType": "perlin2d", "Quality": 2, "Seed": "Land"},
            "plains": {"SourceType": "opensimplex2d", "Seed": "Land"},
            "mask": {"SourceType": "opensimplex2d", "Seed": "Sea"},
        },
        "Generators": {
            "terrain": {
                "GeneratorType": "select2d",
                "Generators": ["hills_fbm", "flat", "mask_fbm"],
                "LowerBound": 0.0,
                "UpperBound": 10.0,
                "EdgeFalloff": 0.1,
            },
            "hills_fbm": {"GeneratorType": "fBm2d", "Sources": ["hills"], "Octaves": 4},
            "flat": {"GeneratorType": "scale2d", "Sources": ["plains"], "Scale": 0.25, "Bias": -0.5},
            "mask_fbm": {"GeneratorType": "fBm2d", "Sources": ["mask"], "Octaves": 2, "Frequency": 0.5},
        },
    }

    @pytest.mark.integration
    def test_document_matches_manual_graph(self):
        import pynoisey as pnz

        bank = pnz.NoiseJSON.from_dict(self.TERRAIN)
        bank.build_sources()
        bank.build_generators()
        from_doc = pnz.Builder2D(bank.get_generator("terrain"), 12, 12, pnz.Builder2DBounds(-2, -2, 2, 2)).build()

        land = pnz.NumpyRandomSource(11)
        sea = pnz.NumpyRandomSource(12)
        hills = pnz.PerlinGenerator2D(land, pnz.HIGH_QUALITY)
        plains = pnz.OpenSimplexGenerator(land)
        mask = pnz.OpenSimplexGenerator(sea)
        terrain = pnz.Select2D(
            pnz.FBMGenerator2D(hills, 4),
            pnz.Scale2D(plains, 0.25, -0.5),
            pnz.FBMGenerator2D(mask, 2, frequency=0.5),
            0.0, 10.0, 0.1,
        )
        manual = pnz.Builder2D(terrain, 12, 12, pnz.Builder2DBounds(-2, -2, 2, 2)).build()

        np.testing.assert_array_equal(from_doc, manual)

    @pytest.mark.integration
    def test_select_output_comes_from_inputs(self):
        import pynoisey as pnz

        bank = pnz.NoiseJSON.from_dict(self.TERRAIN)
        bank.build_sources()
        bank.build_generators()
        terrain = bank.get_generator("terrain")
        flat = bank.get_generator("flat")
        hills = bank.get_generator("hills_fbm")
        mask = bank.get_generator("mask_fbm")

        for x in np.linspace(-3, 3, 25):
            for y in np.linspace(-3, 3, 7):
                c = mask.get_2d(x, y)
                if c <= -0.1:
                    assert terrain.get_2d(x, y) == hills.get_2d(x, y)
                elif 0.1 <= c < 9.9:
                    assert terrain.get_2d(x, y) == flat.get_2d(x, y)


class TestVolumeWorkflow:
    """3D sources feed 3D modules."""

    @pytest.mark.integration
    def test_3d_pipeline(self, random_points):
        import pynoisey as pnz

        bank = pnz.NoiseJSON.from_dict({
            "Seeds": {"s": 3},
            "Sources": {
                "perlin": {"SourceType": "perlin3d", "Seed": "s"},
                "simplex": {"SourceType": "opensimplex3d", "Seed": "s"},
            },
            "Generators": {
                "fbm": {"GeneratorType": "fBm3d", "Sources": ["simplex"], "Octaves": 3},
                "scaled": {"GeneratorType": "scale3d", "Generators": ["fbm"], "Scale": 2.0, "Bias": 1.0},
                "mix": {
                    "GeneratorType": "select3d",
                    "Sources": ["perlin"],
                    "Generators": ["scaled", "fbm"],
                    "LowerBound": -0.2,
                    "UpperBound": 0.2,
                },
            },
        })
        bank.build_sources()
        bank.build_generators()

        mix = bank.get_generator("mix")
        scaled = bank.get_generator("scaled")
        fbm = bank.get_generator("fbm")
        for x, y, z in random_points[:200]:
            v = mix.get_3d(x, y, z)
            assert np.isfinite(v)
            assert scaled.get_3d(x, y, z) == fbm.get_3d(x, y, z) * 2.0 + 1.0

    @pytest.mark.integration
    def test_3d_sources_slice_as_2d(self):
        import pynoisey as pnz

        simplex = pnz.OpenSimplexGenerator(pnz.NumpyRandomSource(5))
        values = pnz.Builder2D(simplex, 10, 10, pnz.Builder2DBounds(0, 0, 2, 2)).build()
        assert np.all(np.abs(values) <= 1.2)
