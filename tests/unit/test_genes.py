"""Unit tests for Genes and the quadrant helpers."""

import pytest

from orbweb.generation.genes import (
    GENE_NAMES,
    Genes,
    direction_bias,
    quadrant,
    sub_radii_step,
)


class TestGenes:
    """Tests for Genes."""

    def test_default_genes(self):
        genes = Genes()
        assert genes.num_first_radii == 8
        assert genes.phase_angle_offset == 0.0
        assert genes.direction_biases == (0.0, 0.0, 0.0, 0.0)
        assert genes.function_type is False
        assert genes.influence_factor == 0.0
        assert len(genes.sub_radii_bias) == 4

    def test_gene_names_cover_fields(self):
        assert set(GENE_NAMES) == set(Genes().as_dict())

    def test_sequences_become_tuples(self):
        genes = Genes(direction_biases=[0, 0.5, 1, 0.5], sub_radii_bias=[10, 20, 30, 40])
        assert genes.direction_biases == (0.0, 0.5, 1.0, 0.5)
        assert genes.sub_radii_bias == (10.0, 20.0, 30.0, 40.0)

    def test_immutable(self):
        genes = Genes()
        with pytest.raises(AttributeError):
            genes.num_first_radii = 3

    def test_with_gene(self):
        genes = Genes()
        changed = genes.with_gene("deviation_value", 0.2)
        assert changed.deviation_value == 0.2
        assert genes.deviation_value != 0.2
        assert changed.num_first_radii == genes.num_first_radii

    def test_with_unknown_gene(self):
        with pytest.raises(ValueError, match="Unknown gene"):
            Genes().with_gene("leg_count", 8)

    @pytest.mark.parametrize("kwargs", [
        {"num_first_radii": 0},
        {"num_first_radii": 2},
        {"sub_radii_bias": (10.0, 0.0, 10.0, 10.0)},
        {"sub_radii_bias": (10.0, 10.0, 10.0)},
        {"direction_biases": (0.0, -1.0, 0.0, 0.0)},
        {"variability_factor": -1.0},
        {"radial_point_offset": -0.1},
        {"deviation_value": -0.1},
    ])
    def test_invalid_genes_fail_fast(self, kwargs):
        with pytest.raises(ValueError):
            Genes(**kwargs)

    def test_with_gene_validates(self):
        with pytest.raises(ValueError):
            Genes().with_gene("num_first_radii", 1)


class TestQuadrants:
    """Tests for quadrant selection and bias interpolation."""

    @pytest.mark.parametrize("angle,expected", [
        (0.0, 0), (45.0, 0), (90.0, 1), (179.9, 1), (180.0, 2),
        (359.9, 3), (360.0, 0), (405.0, 0), (-45.0, 3),
    ])
    def test_quadrant(self, angle, expected):
        assert quadrant(angle) == expected

    def test_direction_bias_interpolates(self):
        genes = Genes(direction_biases=(0.0, 1.0, 2.0, 3.0))
        assert direction_bias(genes, 0.0) == pytest.approx(0.0)
        assert direction_bias(genes, 45.0) == pytest.approx(0.5)
        assert direction_bias(genes, 90.0) == pytest.approx(1.0)
        assert direction_bias(genes, 225.0) == pytest.approx(2.5)
        # Last quadrant wraps back to the first weight
        assert direction_bias(genes, 315.0) == pytest.approx(1.5)

    def test_direction_bias_is_continuous(self):
        genes = Genes(direction_biases=(0.2, 0.8, -0.4, 0.1))
        for boundary in (90.0, 180.0, 270.0, 360.0):
            below = direction_bias(genes, boundary - 1e-9)
            above = direction_bias(genes, boundary + 1e-9)
            assert below == pytest.approx(above, abs=1e-6)

    def test_sub_radii_step(self):
        genes = Genes(sub_radii_bias=(10.0, 20.0, 30.0, 40.0))
        assert sub_radii_step(genes, 10.0) == 10.0
        assert sub_radii_step(genes, 100.0) == 20.0
        assert sub_radii_step(genes, 200.0) == 30.0
        assert sub_radii_step(genes, 300.0) == 40.0
        assert sub_radii_step(genes, 370.0) == 10.0
