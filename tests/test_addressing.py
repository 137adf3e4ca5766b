import pytest

from vmsim.addressing import (
    PTE_SIZE,
    get_physical_address,
    get_vaddr_offset,
    get_vaddr_vpn,
    page_table_address,
    page_table_entry_address,
)
from vmsim.constants import NUM_FRAMES, NUM_PAGES, OFFSET_LEN, PAGE_SIZE


def test_get_vaddr_vpn():
    assert get_vaddr_vpn((0xFF << OFFSET_LEN) + 0x2032) == 0xFF


def test_get_vaddr_offset():
    assert get_vaddr_offset((0xFF << OFFSET_LEN) + 0x2032) == 0x2032


def test_get_page_table():
    assert page_table_address(0x3) == 0xC000


def test_get_page_table_entry():
    assert page_table_entry_address(0x1, 0x3) == 0xC010


def test_get_physical_address():
    assert get_physical_address(0x3, 0x2032) == 0xE032


@pytest.mark.parametrize("vpn", [0, 1, 0x155, NUM_PAGES - 1])
@pytest.mark.parametrize("offset", [0, 1, 0x2032, PAGE_SIZE - 1])
def test_split_round_trip(vpn, offset):
    address = (vpn << OFFSET_LEN) | offset
    assert get_vaddr_vpn(address) == vpn
    assert get_vaddr_offset(address) == offset


@pytest.mark.parametrize("pfn", [0, 1, NUM_FRAMES - 1])
def test_physical_address_splits_back(pfn):
    address = get_physical_address(pfn, 0x123)
    assert address // PAGE_SIZE == pfn
    assert address % PAGE_SIZE == 0x123


def test_entries_are_contiguous():
    first = page_table_entry_address(0, 5)
    assert first == page_table_address(5)
    assert page_table_entry_address(7, 5) - first == 7 * PTE_SIZE