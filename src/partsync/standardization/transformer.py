#!/usr/bin/env python3
"""
Transform raw PCPartPicker items into the pcpartpicker_prices row shape.

Every category maps to the same canonical item:
    {'category', 'name', 'price', 'chipset', 'specs'}

`chipset` is a short display identifier synthesized from the raw fields
(e.g. "Ryzen 7 7800X3D", "DDR5-6000 32GB (2x16GB)", "1TB NVMe SSD").
All transforms are pure and accept any dict; absent fields read as None.
"""

import math
import re
from typing import Callable, Dict, Iterable, List

from ..exceptions import UnknownCategoryError

CPU_VENDOR_PREFIXES = (re.compile(r'^AMD\s+'), re.compile(r'^Intel\s+'))


def format_number(value) -> str:
    """Render a number for display, dropping a trailing .0 (16.0 -> "16")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def as_number(value, default=0):
    """Return value if it is numeric, otherwise default."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


def pick(values, index: int):
    """Safely read values[index] from an optional list field."""
    if isinstance(values, (list, tuple)) and len(values) > index:
        return values[index]
    return None


def as_text(value) -> str:
    """Non-string values count as empty for substring checks."""
    return value if isinstance(value, str) else ''


def _canonical(category: str, item: Dict, chipset, specs: Dict) -> Dict:
    return {
        'category': category,
        'name': item.get('name'),
        'price': item.get('price'),
        'chipset': chipset,
        'specs': specs,
    }


def transform_cpu(item: Dict) -> Dict:
    # Extract chipset-like identifier from name (e.g., "Ryzen 7 7800X3D" or "Core i7-14700K")
    chipset = as_text(item.get('name'))
    for prefix in CPU_VENDOR_PREFIXES:
        chipset = prefix.sub('', chipset)
    chipset = chipset.strip()

    return _canonical('cpu', item, chipset, {
        'core_count': item.get('core_count'),
        'core_clock_ghz': item.get('core_clock'),
        'boost_clock_ghz': item.get('boost_clock'),
        'microarchitecture': item.get('microarchitecture'),
        'tdp_w': item.get('tdp'),
        'integrated_graphics': item.get('graphics'),
        'smt': item.get('smt'),
    })


def transform_gpu(item: Dict) -> Dict:
    return _canonical('gpu', item, item.get('chipset') or None, {
        'memory_gb': item.get('memory'),
        'core_clock_mhz': item.get('core_clock'),
        'boost_clock_mhz': item.get('boost_clock'),
        'length_mm': item.get('length'),
    })


def transform_ram(item: Dict) -> Dict:
    """
    Build "DDR5-6000 32GB (2x16GB)" from speed=[5, 6000] and modules=[2, 16].
    Missing numeric components are rendered as 0.
    """
    speed = item.get('speed')
    modules = item.get('modules')

    ddr_version = as_number(pick(speed, 0))
    mhz = as_number(pick(speed, 1))
    module_count = as_number(pick(modules, 0))
    module_size = as_number(pick(modules, 1))
    total_gb = module_count * module_size

    chipset = (
        f"DDR{format_number(ddr_version)}-{format_number(mhz)} "
        f"{format_number(total_gb)}GB "
        f"({format_number(module_count)}x{format_number(module_size)}GB)"
    )

    return _canonical('ram', item, chipset, {
        'ddr_version': pick(speed, 0),
        'speed_mhz': pick(speed, 1),
        'module_count': pick(modules, 0),
        'module_size_gb': pick(modules, 1),
        'total_gb': total_gb,
        'price_per_gb': item.get('price_per_gb'),
        'cas_latency': item.get('cas_latency'),
        'first_word_latency_ns': item.get('first_word_latency'),
    })


def storage_capacity_label(capacity) -> str:
    """1000 -> "1TB", 2500 -> "3TB", 500 -> "500GB"."""
    capacity = as_number(capacity)
    if capacity >= 1000:
        # Half rounds up
        return f"{int(math.floor(capacity / 1000 + 0.5))}TB"
    return f"{format_number(capacity)}GB"


def transform_storage(item: Dict) -> Dict:
    # Dataset may have non-string values here
    form_factor = as_text(item.get('form_factor'))
    interface = as_text(item.get('interface'))

    is_nvme = 'NVMe' in interface
    is_ssd = item.get('type') == 'SSD' or 'M.2' in form_factor or is_nvme
    storage_type = 'SSD' if is_ssd else 'HDD'

    nvme_label = 'NVMe ' if is_nvme else ''
    chipset = f"{storage_capacity_label(item.get('capacity'))} {nvme_label}{storage_type}"

    return _canonical('storage', item, chipset, {
        'capacity_gb': item.get('capacity'),
        'type': storage_type,
        'form_factor': item.get('form_factor'),
        'interface': item.get('interface'),
        'cache_mb': item.get('cache'),
        'price_per_gb': item.get('price_per_gb'),
    })


def transform_psu(item: Dict) -> Dict:
    # "850W 80+ Gold", or just "850W" when efficiency is unknown
    wattage = item.get('wattage')
    efficiency = item.get('efficiency') or ''
    chipset = f"{format_number(wattage if wattage is not None else 0)}W {efficiency}".strip()

    return _canonical('psu', item, chipset, {
        'wattage': wattage,
        'efficiency': item.get('efficiency'),
        'modular': item.get('modular'),
        'type': item.get('type'),
    })


TRANSFORMERS: Dict[str, Callable[[Dict], Dict]] = {
    'cpu': transform_cpu,
    'gpu': transform_gpu,
    'ram': transform_ram,
    'storage': transform_storage,
    'psu': transform_psu,
}


def get_transformer(canonical_name: str) -> Callable[[Dict], Dict]:
    try:
        return TRANSFORMERS[canonical_name]
    except KeyError:
        raise UnknownCategoryError(canonical_name) from None


def transform_item(canonical_name: str, item: Dict) -> Dict:
    """Transform a single raw item of the given database category."""
    return get_transformer(canonical_name)(item)


def transform_items(canonical_name: str, items: Iterable[Dict]) -> List[Dict]:
    """Transform every raw item of one category, preserving order."""
    transform = get_transformer(canonical_name)
    return [transform(item) for item in items]
