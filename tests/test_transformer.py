import pytest

from partsync.exceptions import UnknownCategoryError
from partsync.standardization.transformer import (
    TRANSFORMERS,
    storage_capacity_label,
    transform_cpu,
    transform_gpu,
    transform_item,
    transform_items,
    transform_psu,
    transform_ram,
    transform_storage,
)


@pytest.mark.parametrize("name, chipset", [
    ("AMD Ryzen 7 7800X3D", "Ryzen 7 7800X3D"),
    ("Intel Core i7-14700K", "Core i7-14700K"),
    ("  Apple M2  ", "Apple M2"),
    ("amd Ryzen 5 5600", "amd Ryzen 5 5600"),
    ("Ryzen AMD 5", "Ryzen AMD 5"),
])
def test_cpu_chipset_strips_vendor_prefix(name, chipset):
    assert transform_cpu({"name": name})["chipset"] == chipset


def test_cpu_specs_mapping():
    raw = {
        "name": "AMD Ryzen 5 7600X",
        "price": 199.99,
        "core_count": 6,
        "core_clock": 4.7,
        "boost_clock": 5.3,
        "microarchitecture": "Zen 4",
        "tdp": 105,
        "graphics": "Radeon",
        "smt": True,
    }
    item = transform_cpu(raw)
    assert item["category"] == "cpu"
    assert item["name"] == "AMD Ryzen 5 7600X"
    assert item["price"] == 199.99
    assert item["specs"] == {
        "core_count": 6,
        "core_clock_ghz": 4.7,
        "boost_clock_ghz": 5.3,
        "microarchitecture": "Zen 4",
        "tdp_w": 105,
        "integrated_graphics": "Radeon",
        "smt": True,
    }


def test_gpu_uses_raw_chipset_or_none():
    item = transform_gpu({"name": "ASUS Dual", "price": 299, "chipset": "GeForce RTX 4060",
                          "memory": 8, "core_clock": 1830, "boost_clock": 2535, "length": 227})
    assert item["chipset"] == "GeForce RTX 4060"
    assert item["specs"] == {"memory_gb": 8, "core_clock_mhz": 1830,
                             "boost_clock_mhz": 2535, "length_mm": 227}
    assert transform_gpu({"name": "X", "chipset": ""})["chipset"] is None
    assert transform_gpu({"name": "X"})["chipset"] is None


def test_ram_chipset_and_specs():
    item = transform_ram({"name": "Corsair Vengeance", "price": 89.99, "speed": [5, 6000],
                          "modules": [2, 16], "price_per_gb": 2.812, "cas_latency": 30,
                          "first_word_latency": 10})
    assert item["chipset"] == "DDR5-6000 32GB (2x16GB)"
    assert item["specs"] == {
        "ddr_version": 5,
        "speed_mhz": 6000,
        "module_count": 2,
        "module_size_gb": 16,
        "total_gb": 32,
        "price_per_gb": 2.812,
        "cas_latency": 30,
        "first_word_latency_ns": 10,
    }


def test_ram_missing_components_default_to_zero():
    item = transform_ram({"name": "Mystery RAM"})
    assert item["chipset"] == "DDR0-0 0GB (0x0GB)"
    assert item["specs"]["ddr_version"] is None
    assert item["specs"]["total_gb"] == 0

    partial = transform_ram({"name": "Half", "speed": [4], "modules": None})
    assert partial["chipset"] == "DDR4-0 0GB (0x0GB)"


def test_ram_whole_floats_render_as_integers():
    item = transform_ram({"name": "Float RAM", "speed": [4, 3200.0], "modules": [2, 8.0]})
    assert item["chipset"] == "DDR4-3200 16GB (2x8GB)"


@pytest.mark.parametrize("raw, chipset, storage_type", [
    ({"capacity": 1000, "interface": "NVMe PCIe 4.0", "form_factor": "M.2-2280"}, "1TB NVMe SSD", "SSD"),
    ({"capacity": 2000, "type": "HDD", "interface": 123}, "2TB HDD", "HDD"),
    ({"capacity": 500, "type": "SSD", "interface": "SATA 6.0 Gb/s", "form_factor": 2.5}, "500GB SSD", "SSD"),
    ({"capacity": 256, "form_factor": "M.2-2242", "interface": "SATA"}, "256GB SSD", "SSD"),
    ({"capacity": 4000, "type": 7200, "form_factor": "3.5\""}, "4TB HDD", "HDD"),
    ({}, "0GB HDD", "HDD"),
])
def test_storage_chipset(raw, chipset, storage_type):
    item = transform_storage(dict(raw, name="Drive"))
    assert item["chipset"] == chipset
    assert item["specs"]["type"] == storage_type


def test_storage_specs_keep_raw_values():
    item = transform_storage({"name": "Drive", "capacity": 2000, "type": "HDD",
                              "interface": 123, "cache": 256, "price_per_gb": 0.02})
    assert item["specs"] == {
        "capacity_gb": 2000,
        "type": "HDD",
        "form_factor": None,
        "interface": 123,
        "cache_mb": 256,
        "price_per_gb": 0.02,
    }


@pytest.mark.parametrize("capacity, label", [
    (999, "999GB"), (1000, "1TB"), (1500, "2TB"), (2500, "3TB"), (1920, "2TB"), (240.0, "240GB"),
])
def test_storage_capacity_label(capacity, label):
    assert storage_capacity_label(capacity) == label


def test_psu_chipset():
    item = transform_psu({"name": "Corsair RM850x", "price": 129.99, "wattage": 850,
                          "efficiency": "gold", "modular": "Full", "type": "ATX"})
    assert item["chipset"] == "850W gold"
    assert item["specs"] == {"wattage": 850, "efficiency": "gold", "modular": "Full", "type": "ATX"}
    assert transform_psu({"name": "Bare", "wattage": 500, "efficiency": None})["chipset"] == "500W"
    assert transform_psu({"name": "Nothing"})["chipset"] == "0W"


@pytest.mark.parametrize("category", sorted(TRANSFORMERS))
def test_transforms_are_total_and_deterministic(category):
    raw = {"name": "Some Part", "price": None, "speed": None, "modules": "2x8"}
    first = transform_item(category, raw)
    second = transform_item(category, raw)
    assert first == second
    assert first["category"] == category
    assert first["name"] == "Some Part"
    assert first["price"] is None
    assert transform_item(category, {})["name"] is None


def test_transform_does_not_mutate_input():
    raw = {"name": "AMD Ryzen 9 7950X", "price": 549.0}
    snapshot = dict(raw)
    transform_item("cpu", raw)
    assert raw == snapshot


def test_transform_items_preserves_order():
    raws = [{"name": f"Intel Core i{n}"} for n in (3, 5, 7, 9)]
    assert [i["chipset"] for i in transform_items("cpu", raws)] == ["Core i3", "Core i5", "Core i7", "Core i9"]


def test_unknown_category():
    with pytest.raises(UnknownCategoryError):
        transform_item("case", {"name": "Lian Li O11"})
