"""Splitting virtual addresses and locating page tables in physical memory."""

from .constants import OFFSET_LEN, PAGE_SIZE, UINT16_MASK, UINT32_MASK

PTE_SIZE = 16
"""Bytes occupied by one page table entry in physical memory."""


def get_vaddr_vpn(addr: int) -> int:
    """Return the virtual page number of a virtual address."""
    return (addr >> OFFSET_LEN) & UINT16_MASK


def get_vaddr_offset(addr: int) -> int:
    """Return the offset of a virtual address within its page."""
    return addr & (PAGE_SIZE - 1)


def page_table_address(ptbr: int) -> int:
    """Return the physical address of the page table held in frame ``ptbr``."""
    return ptbr * PAGE_SIZE


def page_table_entry_address(vpn: int, ptbr: int) -> int:
    """Return the physical address of entry ``vpn`` in the page table at ``ptbr``."""
    return page_table_address(ptbr) + vpn * PTE_SIZE


def get_physical_address(pfn: int, offset: int) -> int:
    """Combine a frame number and a page offset into a physical address."""
    return (pfn * PAGE_SIZE + offset) & UINT32_MASK