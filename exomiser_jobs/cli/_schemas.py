"""Pydantic schemas for the descriptor files accepted on the command line.

Every descriptor is immutable and rejects unknown keys, so decoding a document
against the wrong shape fails instead of silently producing a partial value.
Document keys follow the camelCase names of the on-disk format.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ._errors import UnrecognizedPreset


class Preset(str, Enum):
    """Named default analysis profile."""

    EXOME = "EXOME"
    GENOME = "GENOME"


class OutputFormat(str, Enum):
    HTML = "HTML"
    VCF = "VCF"
    TSV_GENE = "TSV_GENE"
    TSV_VARIANT = "TSV_VARIANT"
    JSON = "JSON"


DEFAULT_OUTPUT_FORMATS = frozenset({OutputFormat.HTML, OutputFormat.JSON})


def parse_preset(value: str) -> Preset:
    """Parse a preset name case-insensitively."""
    normalized = value.lower()
    if normalized == "exome":
        return Preset.EXOME
    if normalized == "genome":
        return Preset.GENOME
    raise UnrecognizedPreset(f"Unrecognised preset option: {value}")


def _upper_enum_name(value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, Enum):
        return value.strip().upper()
    return value


def _is_zero(value: Any) -> bool:
    if isinstance(value, Descriptor):
        return value.is_empty()
    if isinstance(value, Enum):
        # The first member is the enum's zero value.
        return value is next(iter(type(value)))
    return not value


class Descriptor(BaseModel):
    """Base class for decoded descriptor documents."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        # Blank YAML values (``ped:``) mean the field is unset.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def is_empty(self) -> bool:
        """Return True when no field supplied for this descriptor carries a value.

        Only fields that were explicitly provided are inspected, so defaults
        such as the standard output formats do not make a descriptor non-empty.
        """
        return all(_is_zero(getattr(self, name)) for name in self.model_fields_set)


class OutputOptions(Descriptor):
    """Controls where and how results are written."""

    output_prefix: str = ""
    output_formats: frozenset[OutputFormat] = DEFAULT_OUTPUT_FORMATS
    num_genes: int = Field(0, ge=0, description="Number of genes to report (0 for all).")
    contributing_variants_only: bool = Field(False, alias="outputContributingVariantsOnly")

    @field_validator("output_formats", mode="before")
    @classmethod
    def normalize_output_formats(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple, set, frozenset)):
            return [_upper_enum_name(item) for item in value]
        return value

    @field_serializer("output_formats")
    def serialize_output_formats(self, value: frozenset[OutputFormat]) -> list[str]:
        return [fmt.value for fmt in OutputFormat if fmt in value]


class Sample(Descriptor):
    """A single proband with its variants and phenotypes."""

    genome_assembly: str = ""
    vcf_path: str = Field("", alias="vcf")
    pedigree_path: str = Field("", alias="ped")
    proband_id: str = Field("", alias="proband")
    hpo_ids: tuple[str, ...] = ()
    age: dict[str, Any] | None = None
    sex: str = ""


class Phenopacket(Descriptor):
    """Phenopacket describing one individual.

    Nested content is kept as plain mappings; only its presence matters here.
    """

    id: str = ""
    subject: dict[str, Any] | None = None
    phenotypic_features: tuple[dict[str, Any], ...] = ()
    biosamples: tuple[dict[str, Any], ...] = ()
    genes: tuple[dict[str, Any], ...] = ()
    variants: tuple[dict[str, Any], ...] = ()
    diseases: tuple[dict[str, Any], ...] = ()
    hts_files: tuple[dict[str, Any], ...] = ()
    meta_data: dict[str, Any] | None = None


class Family(Descriptor):
    """Family of phenopackets sharing a pedigree."""

    id: str = ""
    proband: Phenopacket | None = None
    relatives: tuple[Phenopacket, ...] = ()
    pedigree: dict[str, Any] | None = None
    hts_files: tuple[dict[str, Any], ...] = ()
    meta_data: dict[str, Any] | None = None


class Analysis(Descriptor):
    """Analysis configuration.

    Older analysis files also embed the sample; those deprecated fields are
    listed in ``LEGACY_FIELDS`` and are cleared once the sample is extracted.
    """

    LEGACY_FIELDS: ClassVar[tuple[str, ...]] = (
        "genome_assembly",
        "vcf_path",
        "pedigree_path",
        "proband_id",
        "hpo_ids",
    )

    genome_assembly: str = ""
    vcf_path: str = Field("", alias="vcf")
    pedigree_path: str = Field("", alias="ped")
    proband_id: str = Field("", alias="proband")
    hpo_ids: tuple[str, ...] = ()
    inheritance_modes: dict[str, Any] = Field(default_factory=dict)
    analysis_mode: str = ""
    frequency_sources: tuple[str, ...] = ()
    pathogenicity_sources: tuple[str, ...] = ()
    steps: tuple[dict[str, Any], ...] = ()


SampleInput = Sample | Phenopacket | Family

# Document key -> shape for the single sample input slot of a job.
SAMPLE_INPUT_SHAPES: dict[str, type[Descriptor]] = {
    "sample": Sample,
    "phenopacket": Phenopacket,
    "family": Family,
}


class Job(Descriptor):
    """Canonical unit of work.

    The sample input slot holds at most one of Sample, Phenopacket or Family.
    In documents it is written under the ``sample``, ``phenopacket`` or
    ``family`` key.
    """

    sample_input: SampleInput | None = None
    analysis: Analysis | None = None
    preset: Preset = Preset.EXOME
    output_options: OutputOptions = Field(default_factory=OutputOptions)

    @model_validator(mode="before")
    @classmethod
    def fold_sample_input(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        present = [key for key in SAMPLE_INPUT_SHAPES if data.get(key) is not None]
        if not present:
            return data
        if len(present) > 1:
            raise ValueError(f"A job accepts only one of sample, phenopacket or family, got: {', '.join(present)}.")
        if data.get("sampleInput") is not None or data.get("sample_input") is not None:
            raise ValueError(f"'{present[0]}' cannot be combined with an explicit sample input.")
        key = present[0]
        shape = SAMPLE_INPUT_SHAPES[key]
        value = data[key]
        folded = {name: item for name, item in data.items() if name not in SAMPLE_INPUT_SHAPES}
        folded["sample_input"] = value if isinstance(value, shape) else shape.model_validate(value)
        return folded

    @field_validator("preset", mode="before")
    @classmethod
    def normalize_preset(cls, value: Any) -> Any:
        return _upper_enum_name(value)

    @property
    def sample(self) -> Sample | None:
        return self.sample_input if isinstance(self.sample_input, Sample) else None

    @property
    def phenopacket(self) -> Phenopacket | None:
        return self.sample_input if isinstance(self.sample_input, Phenopacket) else None

    @property
    def family(self) -> Family | None:
        return self.sample_input if isinstance(self.sample_input, Family) else None

    @property
    def sample_input_kind(self) -> str | None:
        """Document key of the populated sample input slot, if any."""
        for key, shape in SAMPLE_INPUT_SHAPES.items():
            if isinstance(self.sample_input, shape):
                return key
        return None

    def has_sample_input(self) -> bool:
        return self.sample_input is not None

    def to_document(self) -> dict[str, Any]:
        """Serialize back into the on-disk job document layout."""
        document = self.model_dump(mode="json", by_alias=True, exclude={"sample_input"}, exclude_none=True)
        kind = self.sample_input_kind
        if kind is not None:
            document[kind] = self.sample_input.model_dump(mode="json", by_alias=True, exclude_none=True)
        return document


__all__ = [
    "Analysis",
    "DEFAULT_OUTPUT_FORMATS",
    "Descriptor",
    "Family",
    "Job",
    "OutputFormat",
    "OutputOptions",
    "Phenopacket",
    "Preset",
    "SAMPLE_INPUT_SHAPES",
    "Sample",
    "SampleInput",
    "parse_preset",
]
