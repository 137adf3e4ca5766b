# vmsim

A trace-driven simulator of a small paged virtual-memory system. It models
physical memory split into frames, one page table per process, a frame
table, a swap space, and three page replacement policies: random (driven by
a reproducible PCG32 generator), approximate LRU (8-bit aging counters
refreshed by a daemon every 5 accesses) and FIFO.

## Machine model

- 20-bit physical addresses (1 MiB of memory), 24-bit virtual addresses
- 16 KiB pages, so 64 frames and 1024 virtual pages per process
- frame 0 holds the frame table and is never evicted
- each running process owns one protected frame for its page table
- up to 800 process ids (0 to 799)

## Installing

    pip install .

## Running a trace

    vm-sim -i traces/example.trace -r lru

Options:

- `-i PATH` read the trace from a file
- `-s` read the trace from standard input
- `-r POLICY` choose the replacement policy: `random`, `lru` or `fifo`
- `-c` check the consistency of the frame table, page tables and swap after every step
- `-t` run the built-in self tests, then exit (with status 1)
- `-h` show the help text

Both a trace source (`-i` or `-s`) and a policy (`-r`) are required.

A trace holds one command per line:

    START <pid>
    <pid> <r|w> <hex address> <value>
    STOP <pid>

Each command is echoed as it is performed, for example:

           1:   1  w  0x01000 <- 2a
           2:   1  r  0x01000 -> 2a

At the end the simulator prints the total number of accesses, page faults,
writes to disk, the average memory access time, the largest swap size
reached and, if any swap entries were left behind, how much swap was not
freed. A malformed trace line or a failed consistency check stops the run
with exit status 1.

## Using it from Python

```python
import io
from vmsim.constants import Replacement
from vmsim.simulator import Simulator

out = io.StringIO()
sim = Simulator(Replacement.FIFO, check_corruption=True, out=out)
sim.run(["START 1\n", "1 w 0x1000 42\n", "1 r 0x1000 0\n", "STOP 1\n"])
print(out.getvalue())
print(sim.report())
```

- `vmsim.simulator.Simulator` runs trace lines (`run`, `execute`) or
  individual commands (`start_process`, `stop_process`, `access`), checks
  consistency (`check_validity`) and formats the summary (`report`).
- `vmsim.mmu.Machine` is the memory system itself: `mem_access`,
  `page_fault`, `free_frame`, `select_victim_frame`, `daemon_update`,
  `proc_init`, `context_switch`, `proc_cleanup` and `page_table`.
- `vmsim.addressing` splits virtual addresses (`get_vaddr_vpn`,
  `get_vaddr_offset`) and computes physical addresses
  (`get_physical_address`, `page_table_address`, `page_table_entry_address`).
- `vmsim.swap.SwapQueue` is the swap space; `vmsim.stats.Stats` holds the
  counters and `compute_amat`.
- `vmsim.selftest.run_tests` runs the built-in checks.
- `vmsim.constants.parse_replacement` turns `random`, `lru` or `fifo` into a
  `Replacement` value.

Inconsistent machine state raises `vmsim.errors.Panic`; malformed trace
lines raise `vmsim.simulator.TraceError`.

## Limitations

Swap space lives only in memory for the duration of a run; nothing is
written to disk, and there is no way to save or resume a simulation.