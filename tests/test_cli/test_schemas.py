from __future__ import annotations

import pytest
from pydantic import ValidationError

from exomiser_jobs.cli._errors import UnrecognizedPreset
from exomiser_jobs.cli._schemas import (
    DEFAULT_OUTPUT_FORMATS,
    Analysis,
    Family,
    Job,
    OutputFormat,
    OutputOptions,
    Phenopacket,
    Preset,
    Sample,
    parse_preset,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("exome", Preset.EXOME),
        ("EXOME", Preset.EXOME),
        ("Genome", Preset.GENOME),
    ],
)
def test_parse_preset_is_case_insensitive(value: str, expected: Preset) -> None:
    assert parse_preset(value) is expected


def test_parse_preset_rejects_unknown_value() -> None:
    with pytest.raises(UnrecognizedPreset, match="Unrecognised preset option: panel"):
        parse_preset("panel")


@pytest.mark.parametrize("value", [" genome ", "exome\n", ""])
def test_parse_preset_does_not_trim_or_default(value: str) -> None:
    with pytest.raises(UnrecognizedPreset):
        parse_preset(value)


def test_output_options_defaults() -> None:
    options = OutputOptions()

    assert options.output_prefix == ""
    assert options.output_formats == DEFAULT_OUTPUT_FORMATS == {OutputFormat.HTML, OutputFormat.JSON}
    assert options.num_genes == 0
    assert options.contributing_variants_only is False
    assert options.is_empty()


def test_output_options_accepts_document_keys_and_lowercase_formats() -> None:
    options = OutputOptions.model_validate(
        {
            "outputPrefix": "results/sample",
            "outputFormats": ["tsv_gene", "VCF"],
            "numGenes": 25,
            "outputContributingVariantsOnly": True,
        }
    )

    assert options.output_prefix == "results/sample"
    assert options.output_formats == {OutputFormat.TSV_GENE, OutputFormat.VCF}
    assert options.num_genes == 25
    assert options.contributing_variants_only is True
    assert not options.is_empty()


def test_output_options_rejects_negative_gene_count() -> None:
    with pytest.raises(ValidationError):
        OutputOptions(num_genes=-1)


def test_descriptors_reject_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        Sample.model_validate({"vcf": "a.vcf", "subject": {"id": "p1"}})


def test_null_values_are_treated_as_unset() -> None:
    sample = Sample.model_validate({"vcf": "a.vcf", "ped": None, "proband": None})

    assert sample.pedigree_path == ""
    assert sample.proband_id == ""


def test_sample_uses_exomiser_document_keys() -> None:
    sample = Sample.model_validate(
        {
            "genomeAssembly": "hg38",
            "vcf": "sample.vcf.gz",
            "ped": "family.ped",
            "proband": "proband-1",
            "hpoIds": ["HP:0001156", "HP:0001363"],
        }
    )

    assert sample.genome_assembly == "hg38"
    assert sample.vcf_path == "sample.vcf.gz"
    assert sample.pedigree_path == "family.ped"
    assert sample.proband_id == "proband-1"
    assert sample.hpo_ids == ("HP:0001156", "HP:0001363")


def test_is_empty_ignores_explicit_zero_values() -> None:
    assert Sample.model_validate({"vcf": "", "hpoIds": []}).is_empty()
    assert Phenopacket.model_validate({"id": ""}).is_empty()
    assert not Phenopacket.model_validate({"id": "patient-1"}).is_empty()


def test_job_is_empty_treats_exome_as_zero_value() -> None:
    assert Job().is_empty()
    assert Job.model_validate({"preset": "exome"}).is_empty()
    assert not Job.model_validate({"preset": "genome"}).is_empty()


def test_job_folds_sample_key_into_sample_input() -> None:
    job = Job.model_validate({"sample": {"vcf": "a.vcf", "hpoIds": ["HP:0001156"]}})

    assert isinstance(job.sample_input, Sample)
    assert job.sample is job.sample_input
    assert job.phenopacket is None
    assert job.family is None
    assert job.sample_input_kind == "sample"
    assert job.has_sample_input()


def test_job_folds_family_with_nested_phenopackets() -> None:
    job = Job.model_validate(
        {
            "family": {
                "id": "family-1",
                "proband": {"id": "child", "subject": {"id": "child"}},
                "relatives": [{"id": "mother"}, {"id": "father"}],
            }
        }
    )

    assert isinstance(job.family, Family)
    assert job.family.proband.id == "child"
    assert [relative.id for relative in job.family.relatives] == ["mother", "father"]
    assert job.sample_input_kind == "family"


def test_job_rejects_more_than_one_sample_input() -> None:
    with pytest.raises(ValidationError, match="only one of sample, phenopacket or family"):
        Job.model_validate({"sample": {"vcf": "a.vcf"}, "phenopacket": {"id": "p1"}})


def test_job_defaults() -> None:
    job = Job.model_validate({"phenopacket": {"id": "p1"}})

    assert job.preset is Preset.EXOME
    assert job.output_options == OutputOptions()
    assert job.analysis is None


def test_job_to_document_round_trips() -> None:
    job = Job.model_validate(
        {
            "phenopacket": {"id": "p1", "phenotypicFeatures": [{"type": {"id": "HP:0001156"}}]},
            "analysis": {"analysisMode": "PASS_ONLY", "frequencySources": ["GNOMAD_E_AFR"]},
            "preset": "GENOME",
            "outputOptions": {"outputPrefix": "out/p1", "outputFormats": ["JSON", "HTML", "VCF"]},
        }
    )

    document = job.to_document()

    assert "phenopacket" in document
    assert "sample" not in document
    assert "sampleInput" not in document
    assert document["preset"] == "GENOME"
    assert document["outputOptions"]["outputFormats"] == ["HTML", "VCF", "JSON"]
    assert Job.model_validate(document) == job


def test_analysis_lists_legacy_fields() -> None:
    assert Analysis.LEGACY_FIELDS == ("genome_assembly", "vcf_path", "pedigree_path", "proband_id", "hpo_ids")
