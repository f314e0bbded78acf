"""Tests for product, tuple and named composites.

Tests the composite transforms including:
- Dimension additivity
- Fixed coordinate-to-component ordering (CRITICAL)
- Equivalence of nested and flat composites
- Structured products mixing scalar and simplex marginals
"""

import json

import numpy as np
import pytest
from scipy import stats

from hypercube_transform import (
    Product,
    ProductTransform,
    TupleTransform,
    NamedTransform,
    ScalarTransform,
    ascube,
    dimension,
    forward_transform,
    inverse_transform,
    DimensionMismatch,
)


class TestProductContainer:
    """Tests for the Product distribution container."""

    def test_shape_defaults_to_length(self, three_params):
        """Test a flat sequence gets a one-dimensional shape."""
        prod = Product(three_params)
        assert prod.shape == (3,)
        assert prod.size == 3
        assert prod.marginals() == tuple(three_params)

    def test_object_array_keeps_shape(self):
        """Test object arrays keep their shape and flatten in C order."""
        arr = np.empty((2, 3), dtype=object)
        for i in range(2):
            for j in range(3):
                arr[i, j] = stats.norm(10 * i + j, 1)
        prod = Product(arr)
        assert prod.shape == (2, 3)
        assert prod.marginals()[1] is arr[0, 1]
        assert prod.marginals()[3] is arr[1, 0]

    def test_explicit_shape(self):
        """Test an explicit shape reshapes a flat sequence."""
        prod = Product([stats.norm()] * 6, shape=(3, 2))
        assert prod.shape == (3, 2)

    def test_shape_mismatch_raises(self):
        """Test shape must hold exactly the marginals."""
        with pytest.raises(ValueError, match="holds 4 elements"):
            Product([stats.norm()] * 3, shape=(2, 2))

    def test_empty_raises(self):
        """Test an empty product is rejected."""
        with pytest.raises(ValueError, match="at least one marginal"):
            Product([])

    def test_immutable(self, three_params):
        """Test Product is frozen."""
        prod = Product(three_params)
        with pytest.raises(AttributeError):
            prod.shape = (1, 3)


class TestProductTransform:
    """Tests for transforms over Products."""

    def test_dimension_counts_marginals(self, three_params):
        """Test dimension of an all-scalar product is its size."""
        t = ascube(Product(three_params))
        assert isinstance(t, ProductTransform)
        assert dimension(t) == 3
        assert t.dims == (3,)

    def test_forward_matches_components_positionally(self, three_params):
        """Test coordinate i drives marginal i."""
        t = ascube(Product(three_params))
        point = [0.5, 0.5, 0.5]

        value = forward_transform(t, point)

        expected = [forward_transform(ascube(d), [p]) for d, p in zip(three_params, point)]
        assert value.tolist() == pytest.approx(expected)

    def test_ordering_with_distinct_coordinates(self, three_params):
        """Test ordering holds when coordinates differ."""
        point = [0.1, 0.7, 0.35]
        value = ascube(Product(three_params)).forward(point)
        for i, (dist, p) in enumerate(zip(three_params, point)):
            assert value[i] == pytest.approx(dist.ppf(p))

    def test_matrix_product_row_major(self):
        """Test 2-D products fill their output in row-major order."""
        arr = np.empty((2, 2), dtype=object)
        arr[0, 0] = stats.uniform(0, 1)
        arr[0, 1] = stats.uniform(10, 1)
        arr[1, 0] = stats.uniform(20, 1)
        arr[1, 1] = stats.uniform(30, 1)
        t = ascube(arr)

        value = t.forward([0.1, 0.2, 0.3, 0.4])

        assert value.shape == (2, 2)
        assert value == pytest.approx(np.array([[0.1, 10.2], [20.3, 30.4]]))

    def test_inverse_flattens_row_major(self):
        """Test inverse reads 2-D values in row-major order."""
        arr = np.empty((2, 2), dtype=object)
        for k, (i, j) in enumerate(np.ndindex(2, 2)):
            arr[i, j] = stats.uniform(10 * k, 1)
        coords = ascube(arr).inverse(np.array([[0.1, 10.2], [20.3, 30.4]]))
        assert coords == pytest.approx([0.1, 0.2, 0.3, 0.4])

    def test_round_trip(self, three_params):
        """Test inverse undoes forward."""
        t = ascube(Product(three_params))
        point = np.array([0.2, 0.9, 0.45])
        assert inverse_transform(t, forward_transform(t, point)) == pytest.approx(point, rel=1e-9)

    def test_float32_preserved(self):
        """Test the coordinate dtype carries through scalar products."""
        t = ascube(Product([stats.uniform(), stats.uniform()]))
        value = t.forward(np.array([0.25, 0.75], dtype=np.float32))
        assert value.dtype == np.float32
        coords = t.inverse(value)
        assert coords.dtype == np.float32

    def test_inverse_wrong_length_raises(self, three_params):
        """Test values with the wrong element count are rejected."""
        with pytest.raises(DimensionMismatch, match="3 elements, got 2"):
            ascube(Product(three_params)).inverse([0.0, 0.5])

    def test_nested_products_add_dimensions(self):
        """Test dimension additivity across nesting."""
        inner = Product([stats.norm(), stats.norm()])
        outer = Product([inner, stats.dirichlet([1.0, 1.0, 1.0]), stats.uniform()])
        t = ascube(outer)
        assert t.dimension == 2 + 2 + 1

    def test_structured_product_returns_list(self):
        """Test structured marginals produce a list of child values."""
        t = ascube(Product([stats.dirichlet([1.0, 1.0, 1.0]), stats.norm()]))
        value = t.forward([0.3, 0.6, 0.5])

        assert isinstance(value, list)
        assert len(value) == 2
        assert value[0].sum() == pytest.approx(1.0)
        assert value[1] == pytest.approx(0.0)

        coords = t.inverse(value)
        assert coords == pytest.approx([0.3, 0.6, 0.5], rel=1e-9)

    def test_structured_product_must_be_flat(self):
        """Test multi-dimensional products need scalar marginals."""
        arr = np.empty((2, 1), dtype=object)
        arr[0, 0] = stats.dirichlet([1.0, 1.0])
        arr[1, 0] = stats.dirichlet([1.0, 1.0])
        with pytest.raises(ValueError, match="one-dimensional"):
            ascube(arr)


class TestTupleAndNamed:
    """Tests for tuple and named composites."""

    def test_tuple_forward(self):
        """Test tuples map component-wise in order."""
        t = ascube((stats.norm(), stats.uniform(2, 3)))
        assert isinstance(t, TupleTransform)
        value = t.forward([0.5, 0.5])
        assert isinstance(value, tuple)
        assert value == pytest.approx((0.0, 3.5))

    def test_list_is_tuple_composite(self, three_params):
        """Test lists are treated like tuples."""
        assert isinstance(ascube(three_params), TupleTransform)

    def test_named_forward_preserves_key_order(self):
        """Test named composites follow declared key order."""
        t = ascube({"beta": stats.uniform(0, 10), "alpha": stats.uniform(0, 1)})
        assert isinstance(t, NamedTransform)
        value = t.forward([0.5, 0.25])
        assert list(value) == ["beta", "alpha"]
        assert value["beta"] == pytest.approx(5.0)
        assert value["alpha"] == pytest.approx(0.25)

    def test_named_child_lookup(self):
        """Test children are reachable by name."""
        t = ascube({"a": stats.norm(), "b": stats.dirichlet([1.0, 1.0])})
        assert isinstance(t["a"], ScalarTransform)
        with pytest.raises(KeyError, match="Unknown component"):
            t["z"]

    def test_named_inverse_requires_same_keys(self):
        """Test inverse rejects missing or extra components."""
        t = ascube({"a": stats.norm(), "b": stats.norm()})
        with pytest.raises(DimensionMismatch, match="Expected components"):
            t.inverse({"a": 0.0})
        with pytest.raises(DimensionMismatch, match="Expected components"):
            t.inverse({"a": 0.0, "c": 1.0})

    def test_tuple_inverse_wrong_length(self):
        """Test tuple inverse checks the number of values."""
        t = ascube((stats.norm(), stats.norm()))
        with pytest.raises(DimensionMismatch, match="tuple of 2 values"):
            t.inverse((0.0,))

    def test_named_inverse_rejects_non_mapping(self):
        """Test a record composite needs a mapping value."""
        t = ascube({"a": stats.norm()})
        with pytest.raises(DimensionMismatch, match="Expected a mapping"):
            t.inverse([0.0])

    def test_tuple_inverse_rejects_scalar(self):
        """Test a tuple composite needs a sequence value."""
        t = ascube((stats.norm(), stats.norm()))
        with pytest.raises(DimensionMismatch, match="sequence for tuple"):
            t.inverse(0.5)
        with pytest.raises(DimensionMismatch, match="sequence for tuple"):
            t.inverse({"a": 0.0, "b": 1.0})

    def test_structured_product_inverse_rejects_scalar(self):
        """Test a product of structured marginals needs a sequence value."""
        t = ascube(Product([stats.norm(), stats.dirichlet([1.0, 1.0])]))
        with pytest.raises(DimensionMismatch, match="sequence for product"):
            t.inverse(0.5)

    def test_duplicate_names_rejected(self):
        """Test NamedTransform enforces unique names."""
        child = ascube(stats.norm())
        with pytest.raises(ValueError, match="Duplicate component names"):
            NamedTransform(("a", "a"), (child, child))

    def test_mixed_round_trip(self):
        """Test round trip through a record of mixed structures."""
        t = ascube({
            "rate": stats.gamma(2.0),
            "weights": stats.dirichlet([2.0, 1.0, 1.0]),
            "offsets": Product([stats.norm(), stats.norm(5, 2)]),
        })
        assert t.dimension == 1 + 2 + 2
        point = np.array([0.3, 0.4, 0.8, 0.15, 0.65])
        assert t.inverse(t.forward(point)) == pytest.approx(point, rel=1e-9)

    def test_empty_tuple_has_zero_dimension(self):
        """Test an empty composite consumes nothing."""
        t = ascube(())
        assert t.dimension == 0
        assert t.forward([]) == ()


class TestCompositeConsistency:
    """Nested and flat descriptions of the same model agree."""

    def test_flat_and_split_models(self, three_params):
        """Test a 3-parameter model equals a 2+1 split of the same model."""
        a, b, c = three_params
        flat = ascube((a, b, c))
        split = ascube(((a, b), c))
        point = [0.5, 0.5, 0.5]

        assert dimension(flat) == dimension(split) == 3

        fa, fb, fc = forward_transform(flat, point)
        (sa, sb), sc = forward_transform(split, point)
        assert (fa, fb, fc) == (sa, sb, sc)

    def test_submodel_inside_record(self, three_params):
        """Test a model embedded as a sub-model transforms identically."""
        a, b, c = three_params
        model = {"a": a, "b": b, "c": c}
        h1 = ascube(model)
        h2 = ascube({"m1": model})
        point = [0.5, 0.5, 0.5]

        assert dimension(h2) == dimension(h1)
        assert forward_transform(h1, point) == forward_transform(h2, point)["m1"]


class TestSerialization:
    """Tests for to_dict summaries."""

    def test_nested_to_dict_is_json(self):
        """Test summaries serialize to JSON."""
        t = ascube({
            "x": stats.norm(),
            "p": stats.dirichlet([1.0, 2.0]),
            "grid": Product([stats.uniform()] * 4, shape=(2, 2)),
        })
        summary = t.to_dict()
        json.dumps(summary)

        assert summary["kind"] == "named"
        assert summary["dimension"] == 1 + 1 + 4
        assert summary["children"]["x"] == {"kind": "scalar", "dimension": 1, "distribution": "norm"}
        assert summary["children"]["p"]["alpha"] == [1.0, 2.0]
        assert summary["children"]["grid"]["dims"] == [2, 2]
