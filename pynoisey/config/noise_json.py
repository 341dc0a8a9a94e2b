"""
Declarative assembly of seeds, noise sources and generator modules.

A noise document names three kinds of things and wires them together by name:

    {
      "Seeds": {"Default": 1},
      "Sources": {
        "perlin": {"SourceType": "perlin2d", "Quality": 2, "Seed": "Default"}
      },
      "Generators": {
        "basic": {
          "GeneratorType": "fBm2d",
          "Sources": ["perlin"],
          "Octaves": 5,
          "Persistence": 0.25,
          "Lacunarity": 2,
          "Frequency": 1.13
        }
      }
    }

Keys are matched case-insensitively with underscores ignored, so
``source_type`` or ``sourceType`` work as well as ``SourceType``. Type strings
are matched exactly.

Usage:
    bank = NoiseJSON.load("noise.json")
    bank.build_sources()
    bank.build_generators()
    fbm = bank.get_generator("basic")

Sources must be built before generators. Every source naming the same seed
shares one RandomSource. Generators may reference other generators; they are
resolved in dependency order whatever order the document lists them in.

Parameters a generator entry leaves out take these defaults rather than zero:
Octaves 1, Persistence 0.5, Lacunarity 2, Frequency 1, Scale 1, Bias 0,
LowerBound 0, UpperBound 0, EdgeFalloff 0. Source Quality defaults to 0
(fast). Values must be JSON numbers (Octaves and Quality integers) and names
must be strings; anything else raises NoiseConfigError naming the entry.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..modules import FBMGenerator2D, FBMGenerator3D, Scale2D, Scale3D, Select2D, Select3D
from ..noise import OpenSimplexGenerator, PerlinGenerator, PerlinGenerator2D, Source2D, Source3D
from ..rng import NumpyRandomSource

logger = logging.getLogger(__name__)

# Seed used when a source names a seed that the document does not define
DEFAULT_SEED = 1


class NoiseConfigError(ValueError):
    """
    Raised when a noise document cannot be parsed or assembled.

    Attributes:
        entry: Name of the source or generator being built, if any
        reference: Offending name or type string, if any
    """

    def __init__(self, message, entry=None, reference=None):
        super().__init__(message)
        self.entry = entry
        self.reference = reference


@dataclass
class SourceJSON:
    """Description of a base noise source."""

    source_type: Optional[str] = None
    quality: int = 0
    seed: str = ""


@dataclass
class GeneratorJSON:
    """
    Description of a generator module. Not every parameter applies to every
    generator type.
    """

    generator_type: Optional[str] = None
    sources: List[str] = field(default_factory=list)
    generators: List[str] = field(default_factory=list)
    octaves: int = 1
    persistence: float = 0.5
    lacunarity: float = 2.0
    frequency: float = 1.0
    lower_bound: float = 0.0
    upper_bound: float = 0.0
    edge_falloff: float = 0.0
    scale: float = 1.0
    bias: float = 0.0


# attribute name -> key written by dumps()
_SOURCE_KEYS = {
    "source_type": "SourceType",
    "quality": "Quality",
    "seed": "Seed",
}
_GENERATOR_KEYS = {
    "generator_type": "GeneratorType",
    "sources": "Sources",
    "generators": "Generators",
    "octaves": "Octaves",
    "persistence": "Persistence",
    "lacunarity": "Lacunarity",
    "frequency": "Frequency",
    "lower_bound": "LowerBound",
    "upper_bound": "UpperBound",
    "edge_falloff": "EdgeFalloff",
    "scale": "Scale",
    "bias": "Bias",
}

_SOURCE_TYPES = {
    "perlin2d": lambda rng, desc: PerlinGenerator2D(rng, desc.quality),
    "perlin3d": lambda rng, desc: PerlinGenerator(rng),
    "opensimplex2d": lambda rng, desc: OpenSimplexGenerator(rng),
    "opensimplex3d": lambda rng, desc: OpenSimplexGenerator(rng),
}


def _make_fbm(cls):
    def factory(inputs, desc):
        return cls(inputs[0], desc.octaves, desc.persistence, desc.lacunarity, desc.frequency)
    return factory


def _make_select(cls):
    def factory(inputs, desc):
        a, b, control = inputs
        return cls(a, b, control, desc.lower_bound, desc.upper_bound, desc.edge_falloff)
    return factory


def _make_scale(cls):
    def factory(inputs, desc):
        return cls(inputs[0], desc.scale, desc.bias)
    return factory


# generator type -> (factory, number of inputs, required input capability)
_GENERATOR_TYPES = {
    "fBm2d": (_make_fbm(FBMGenerator2D), 1, Source2D),
    "fBm3d": (_make_fbm(FBMGenerator3D), 1, Source3D),
    "select2d": (_make_select(Select2D), 3, Source2D),
    "select3d": (_make_select(Select3D), 3, Source3D),
    "scale2d": (_make_scale(Scale2D), 1, Source2D),
    "scale3d": (_make_scale(Scale3D), 1, Source3D),
}


def _normalize_key(key: str) -> str:
    return key.replace("_", "").lower()


def _lookup(mapping: dict, name: str, default=None):
    """Fetch a key from a document mapping regardless of its spelling."""
    wanted = _normalize_key(name)
    for key, value in mapping.items():
        if _normalize_key(key) == wanted:
            return value
    return default


# value kinds accepted for each entry attribute
_STRING = "a string"
_INTEGER = "an integer"
_NUMBER = "a number"
_NAME_LIST = "a list of names"

_ATTRIBUTE_KINDS = {
    "source_type": _STRING,
    "generator_type": _STRING,
    "seed": _STRING,
    "quality": _INTEGER,
    "octaves": _INTEGER,
    "persistence": _NUMBER,
    "lacunarity": _NUMBER,
    "frequency": _NUMBER,
    "lower_bound": _NUMBER,
    "upper_bound": _NUMBER,
    "edge_falloff": _NUMBER,
    "scale": _NUMBER,
    "bias": _NUMBER,
    "sources": _NAME_LIST,
    "generators": _NAME_LIST,
}


def _is_kind(value, kind) -> bool:
    if kind == _STRING:
        return isinstance(value, str)
    if isinstance(value, bool):
        return False
    if kind == _INTEGER:
        return isinstance(value, int)
    if kind == _NUMBER:
        return isinstance(value, (int, float))
    return isinstance(value, list) and all(isinstance(ref, str) for ref in value)


def _check_entry(desc, keys, entry_name):
    """
    Verify every attribute of a SourceJSON / GeneratorJSON holds the right kind of value.

    A missing type string (None) is left for the builders to report.

    Raises:
        NoiseConfigError: Naming the entry and the offending key
    """
    for attr, out_key in keys.items():
        value = getattr(desc, attr)
        if value is None and attr in ("source_type", "generator_type"):
            continue
        kind = _ATTRIBUTE_KINDS[attr]
        if not _is_kind(value, kind):
            raise NoiseConfigError(
                f'Entry "{entry_name}": "{out_key}" must be {kind}, got {value!r}.',
                entry=entry_name,
                reference=out_key,
            )


def _parse_entry(cls, keys, entry_name, data):
    if not isinstance(data, dict):
        raise NoiseConfigError(
            f'Entry "{entry_name}" must be a mapping, got {type(data).__name__}.',
            entry=entry_name,
        )
    by_norm = {_normalize_key(attr): attr for attr in keys}
    kwargs = {}
    for key, value in data.items():
        attr = by_norm.get(_normalize_key(key))
        if attr is None:
            logger.debug('Ignoring unknown key "%s" in entry "%s"', key, entry_name)
            continue
        kwargs[attr] = value
    for list_attr in ("sources", "generators"):
        if kwargs.get(list_attr, []) is None:
            kwargs[list_attr] = []
        elif isinstance(kwargs.get(list_attr), tuple):
            kwargs[list_attr] = list(kwargs[list_attr])
    desc = cls(**kwargs)
    _check_entry(desc, keys, entry_name)
    return desc


def _dump_entry(desc, keys):
    return {out_key: getattr(desc, attr) for attr, out_key in keys.items()}


class NoiseJSON:
    """
    A system of seeds, noise sources and generators loaded from or saved to JSON.

    Args:
        seeds: Mapping of seed name -> integer seed
        sources: Mapping of source name -> SourceJSON
        generators: Mapping of generator name -> GeneratorJSON
    """

    def __init__(
        self,
        seeds: Optional[Dict[str, int]] = None,
        sources: Optional[Dict[str, SourceJSON]] = None,
        generators: Optional[Dict[str, GeneratorJSON]] = None,
    ):
        self.seeds = dict(seeds or {})
        self.sources = dict(sources or {})
        self.generators = dict(generators or {})

        self._built_seeds = {}
        self._built_sources = None
        self._built_generators = {}

    @classmethod
    def from_dict(cls, data: dict) -> "NoiseJSON":
        """Create a NoiseJSON from an already parsed document."""
        if not isinstance(data, dict):
            raise NoiseConfigError(
                f"Noise document must be a mapping, got {type(data).__name__}."
            )

        seeds = _lookup(data, "Seeds") or {}
        sources = _lookup(data, "Sources") or {}
        generators = _lookup(data, "Generators") or {}
        for section, value in (("Seeds", seeds), ("Sources", sources), ("Generators", generators)):
            if not isinstance(value, dict):
                raise NoiseConfigError(f'"{section}" must be a mapping of names.')

        for name, seed in seeds.items():
            if isinstance(seed, bool) or not isinstance(seed, int):
                raise NoiseConfigError(
                    f'Seed "{name}" must be an integer, got {seed!r}.', entry=name
                )

        return cls(
            seeds=seeds,
            sources={
                name: _parse_entry(SourceJSON, _SOURCE_KEYS, name, entry)
                for name, entry in sources.items()
            },
            generators={
                name: _parse_entry(GeneratorJSON, _GENERATOR_KEYS, name, entry)
                for name, entry in generators.items()
            },
        )

    @classmethod
    def loads(cls, text) -> "NoiseJSON":
        """Parse a JSON string or bytes."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise NoiseConfigError(f"Unable to read JSON into the noise configuration: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def load(cls, path) -> "NoiseJSON":
        """Read a JSON document from a file path."""
        return cls.loads(Path(path).read_text(encoding="utf-8"))

    def to_dict(self) -> dict:
        return {
            "Seeds": dict(self.seeds),
            "Sources": {name: _dump_entry(s, _SOURCE_KEYS) for name, s in self.sources.items()},
            "Generators": {
                name: _dump_entry(g, _GENERATOR_KEYS) for name, g in self.generators.items()
            },
        }

    def dumps(self) -> str:
        """Serialize to tab-indented JSON."""
        return json.dumps(self.to_dict(), indent="\t")

    def save(self, path):
        Path(path).write_text(self.dumps(), encoding="utf-8")

    def build_sources(self, seed_builder: Callable[[int], object] = NumpyRandomSource):
        """
        Create the random sources and noise sources described by the document.

        Args:
            seed_builder: Callable turning an integer seed into a RandomSource

        Raises:
            NoiseConfigError: On an unknown source type or invalid source parameters
        """
        built_seeds = {}
        built_sources = {}

        for source_name, desc in self.sources.items():
            _check_entry(desc, _SOURCE_KEYS, source_name)
            rng = built_seeds.get(desc.seed)
            if rng is None:
                seed = self.seeds.get(desc.seed)
                if seed is None:
                    logger.warning(
                        'Source "%s" references undefined seed "%s"; using %d',
                        source_name, desc.seed, DEFAULT_SEED,
                    )
                    seed = DEFAULT_SEED
                rng = seed_builder(seed)
                built_seeds[desc.seed] = rng

            factory = _SOURCE_TYPES.get(desc.source_type)
            if factory is None:
                raise NoiseConfigError(
                    f"Undefined source type ({desc.source_type}) for source {source_name}.",
                    entry=source_name,
                    reference=desc.source_type,
                )
            try:
                built_sources[source_name] = factory(rng, desc)
            except (TypeError, ValueError) as e:
                raise NoiseConfigError(
                    f'Source "{source_name}" creation failed: {e}', entry=source_name
                ) from e
            logger.debug('Built source "%s" (%s)', source_name, desc.source_type)

        self._built_seeds = built_seeds
        self._built_sources = built_sources
        self._built_generators = {}

    def build_generators(self):
        """
        Create the generator modules described by the document.

        Must be called after build_sources(). Nothing is stored unless every
        generator builds.

        Raises:
            NoiseConfigError: On an unknown name, type, input count or arity, or a cycle
        """
        if self._built_sources is None:
            raise NoiseConfigError("build_sources() must be called before build_generators().")

        built = {}
        for name in self.generators:
            self._resolve_generator(name, built, [])
        self._built_generators = built

    def _resolve_generator(self, name, built, chain):
        if name in built:
            return built[name]
        if name in chain:
            cycle = " -> ".join(chain + [name])
            raise NoiseConfigError(
                f'Generator "{chain[-1]}" creation failed: reference cycle {cycle}.',
                entry=chain[-1],
                reference=name,
            )

        desc = self.generators[name]
        _check_entry(desc, _GENERATOR_KEYS, name)
        type_info = _GENERATOR_TYPES.get(desc.generator_type)
        if type_info is None:
            raise NoiseConfigError(
                f"Undefined generator type ({desc.generator_type}) for generator {name}.",
                entry=name,
                reference=desc.generator_type,
            )
        factory, n_inputs, capability = type_info

        inputs = []
        for ref in desc.sources:
            source = self._built_sources.get(ref)
            if source is None:
                raise NoiseConfigError(
                    f'Generator "{name}" creation failed: couldn\'t find built source "{ref}".',
                    entry=name,
                    reference=ref,
                )
            inputs.append(source)
        for ref in desc.generators:
            if ref not in self.generators:
                raise NoiseConfigError(
                    f'Generator "{name}" creation failed: couldn\'t find generator "{ref}".',
                    entry=name,
                    reference=ref,
                )
            inputs.append(self._resolve_generator(ref, built, chain + [name]))

        if len(inputs) != n_inputs:
            raise NoiseConfigError(
                f'Generator "{name}" ({desc.generator_type}) needs {n_inputs} input(s), '
                f"got {len(inputs)}.",
                entry=name,
            )
        refs = desc.sources + desc.generators
        for ref, inp in zip(refs, inputs):
            if not isinstance(inp, capability):
                raise NoiseConfigError(
                    f'Generator "{name}" ({desc.generator_type}) cannot use "{ref}": '
                    f"it is not a {capability.__name__}.",
                    entry=name,
                    reference=ref,
                )

        try:
            generator = factory(inputs, desc)
        except (TypeError, ValueError) as e:
            raise NoiseConfigError(f'Generator "{name}" creation failed: {e}', entry=name) from e

        built[name] = generator
        logger.debug('Built generator "%s" (%s)', name, desc.generator_type)
        return generator

    def get_source(self, name: str):
        """Return a built noise source, or None."""
        if self._built_sources is None:
            return None
        return self._built_sources.get(name)

    def get_generator(self, name: str):
        """Return a built generator, or None. Call after build_sources() and build_generators()."""
        return self._built_generators.get(name)
