"""
Analysis Presets
Configuration for the XOR breaker and CBC chainer, with predefined presets

Instead of picking key-size ranges and candidate counts by hand, use a preset:
    config = AnalysisConfig.from_preset("thorough", block_size=16)
"""

from dataclasses import dataclass, fields
from typing import List, Optional

# Settings a preset controls
PRESET_FIELDS = ("key_size_min", "key_size_max", "key_size_candidates")


@dataclass
class AnalysisConfig:
    """
    Configuration for Cryptoscope analysis

    Can be initialized from:
    1. Preset name: AnalysisConfig(preset="thorough")
    2. Custom parameters: AnalysisConfig(key_size_max=64, key_size_candidates=3)
    3. Both: AnalysisConfig(preset="thorough", key_size_max=64) keeps the explicit
       key_size_max and takes the remaining search settings from the preset
    """
    # Key-size search (max is exclusive)
    key_size_min: int = 2
    key_size_max: int = 40
    key_size_candidates: int = 1     # How many best-ranked sizes to try

    # Cipher settings
    block_size: int = 16
    text_encoding: str = "utf-8"

    preset: Optional[str] = None

    def __post_init__(self):
        """Apply preset if specified, then validate"""
        if self.preset:
            preset_obj = PresetLibrary.get_preset(self.preset)
            if not preset_obj:
                raise ValueError(f"Unknown preset: {self.preset}. Available: {PresetLibrary.list_presets()}")
            # Explicit arguments win; the preset only fills fields left at their defaults
            defaults = {f.name: f.default for f in fields(self)}
            for name in PRESET_FIELDS:
                if getattr(self, name) == defaults[name]:
                    setattr(self, name, getattr(preset_obj, name))
        self.validate()

    def validate(self):
        """Raise ValueError if any setting is out of range"""
        if self.key_size_min < 1:
            raise ValueError(f"key_size_min must be at least 1, got {self.key_size_min}")
        if self.key_size_max <= self.key_size_min:
            raise ValueError(f"Empty key size range: [{self.key_size_min}, {self.key_size_max})")
        if self.key_size_candidates < 1:
            raise ValueError(f"key_size_candidates must be at least 1, got {self.key_size_candidates}")
        if self.block_size < 1:
            raise ValueError(f"block_size must be positive, got {self.block_size}")

    @property
    def key_sizes(self) -> range:
        """Candidate key sizes"""
        return range(self.key_size_min, self.key_size_max)

    @staticmethod
    def from_preset(preset_name: str, **overrides) -> 'AnalysisConfig':
        """
        Create config from preset with optional overrides

        Example:
            config = AnalysisConfig.from_preset("exhaustive", key_size_candidates=8)
        """
        preset = PresetLibrary.get_preset(preset_name)
        if not preset:
            raise ValueError(f"Unknown preset: {preset_name}. Available: {PresetLibrary.list_presets()}")

        settings = {name: getattr(preset, name) for name in PRESET_FIELDS}
        known = {f.name for f in fields(AnalysisConfig)} - {'preset'}
        for key, value in overrides.items():
            if key not in known:
                raise ValueError(f"Unknown config option: {key}")
            settings[key] = value

        config = AnalysisConfig(**settings)
        config.preset = preset.name
        return config


@dataclass
class AnalysisPreset:
    """Named key-size search policy"""
    name: str
    description: str
    key_size_min: int = 2
    key_size_max: int = 40
    key_size_candidates: int = 1


class PresetLibrary:
    """Library of predefined analysis presets"""

    @staticmethod
    def get_preset(name: str) -> Optional[AnalysisPreset]:
        """Get preset by name"""
        presets = {
            "baseline": PresetLibrary.baseline(),
            "thorough": PresetLibrary.thorough(),
            "exhaustive": PresetLibrary.exhaustive(),
        }
        return presets.get(name.lower())

    @staticmethod
    def list_presets() -> List[str]:
        """List all available preset names"""
        return ["baseline", "thorough", "exhaustive"]

    @staticmethod
    def baseline() -> AnalysisPreset:
        """
        Baseline preset: single best key size from [2, 40)

        Use when the ciphertext is long enough for the Hamming estimate to be
        reliable (a few hundred bytes or more).
        """
        return AnalysisPreset(
            name="baseline",
            description="Best-ranked key size only, sizes 2-39",
        )

    @staticmethod
    def thorough() -> AnalysisPreset:
        """
        Thorough preset: try the three best key sizes, keep the best plaintext

        Use when:
        - Ciphertext is short
        - Several key sizes score close together
        """
        return AnalysisPreset(
            name="thorough",
            description="Three best-ranked key sizes, sizes 2-39",
            key_size_candidates=3,
        )

    @staticmethod
    def exhaustive() -> AnalysisPreset:
        """Exhaustive preset: wider range (1-64) and five candidates"""
        return AnalysisPreset(
            name="exhaustive",
            description="Five best-ranked key sizes, sizes 1-64",
            key_size_min=1,
            key_size_max=65,
            key_size_candidates=5,
        )
