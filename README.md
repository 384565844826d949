# tgkernel

Building blocks of a small teaching operating-system kernel, modelled as plain
Python objects. The kernel's bookkeeping (signals, processes and threads,
locks, system-call routing) can be exercised, inspected and tested without any
hardware or emulator.

## What is inside

- `tgkernel.context`: `LocalContext`, the saved register file of a thread
  (registers `x1`..`x31`, `pc`, `supervisor` and `interrupt` flags). It has
  accessors `x`/`set_x`, `a`/`set_a`, `ra`, `sp`/`set_sp`, `move_next` and
  `copy`, and constructors `empty`, `user` and `thread`. `build_sstatus`
  derives a status word from a current one: it sets the privilege and
  interrupt bits as asked and always sets the floating-point state bits.
- `tgkernel.signal_defs`: `SignalNo` (signal numbers 0..63, including the
  real-time range; `SignalNo.from_number` maps unknown numbers to `ERR`),
  `SignalAction` (handler address and mask) and `MAX_SIG`.
- `tgkernel.signal_set`: `SignalSet`, a 64-bit set of signal bits with
  `add`, `remove`, `contains`, `union`, `difference`, `set_new`,
  `trailing_zeros` and `find_first_one`.
- `tgkernel.signals`: the `Signal` interface and `SignalImpl`. It keeps the
  pending signals, the mask and the handlers of one process, delivers at most
  one unmasked signal per `handle_signals` call, stops on `SIGSTOP` until
  `SIGCONT`, and restores the interrupted context on `sig_return`. Results
  are `SignalResult` values with a `SignalResultKind`. `default_action` gives
  the outcome for a signal without a handler: `SIGCHLD` and `SIGURG` are
  ignored, every other signal kills the process with exit code minus the
  signal number.
- `tgkernel.ids`: `ProcId`, `ThreadId` and `CoroId`. Each kind has its own
  counter, and `new()` allocates from 0 upwards.
- `tgkernel.relations`: `ProcRel` and `ProcThreadRel`, parent/child and
  process/thread relationships with `wait_any_child`, `wait_child` and
  `wait_thread`. A child that is still running is reported as
  `(STILL_RUNNING, -1)` and a running thread as `-2`. Unknown ids give `None`.
- `tgkernel.cell`: `UPIntrFreeCell`, an exclusive-access cell. Its
  `exclusive_access()` context manager and its `exclusive_session(func)` mask
  interrupts while the cell is held. Nested masking is tracked by
  `IntrMaskingInfo` over an `Sstatus` flag. Borrowing a cell twice raises
  `RuntimeError`.
- `tgkernel.sync`: the `Mutex` interface, `MutexBlocking`, `Semaphore` and
  `Condvar`. They do not schedule anything themselves. They return whether
  the calling thread must be blocked and which `ThreadId`, if any, should be
  woken.
- `tgkernel.manage`: the `Manage` (insert/delete/get by id) and `Schedule`
  (add/fetch) interfaces.
- `tgkernel.proc_manager`: `PManager`, which tracks processes, the running
  process and their relationships on top of a manager object you supply.
  Exited processes hand their children to process 0. `INIT_PARENT` is the
  parent id of the first process.
- `tgkernel.thread_manager`: `PThreadManager`, for processes that have
  threads. A process is removed when its last thread exits.
- `tgkernel.linker`: the linker-script texts `SCRIPT` and `NOBIOS_SCRIPT`,
  and `KernelLayout` with `start`, `end`, `length` and `regions`. `regions`
  yields a `KernelRegion` for each of text, rodata, data and boot, titled by
  `KernelRegionTitle`.
- `tgkernel.syscall_ids`: `SyscallId` and `parse_syscall_header`, which reads
  `#define __NR_<name> <number>` lines into a dict keyed by upper-case names.
- `tgkernel.fs_types`: `Stat` (with `is_dir`/`is_file`), `StatMode`, and the
  descriptors `STDIN`, `STDOUT` and `STDDEBUG`.
- `tgkernel.timespec`: `ClockId` with its named clocks, and `TimeSpec` with
  `from_millisecond`, addition and the constants `ZERO`, `SECOND`,
  `MILLISECOND`, `MICROSECOND` and `NANOSECOND`.
- `tgkernel.syscall_kernel`: `SyscallDispatcher`, which routes a system call
  to registered process, I/O, memory, scheduling, clock and signal handlers.
  It returns `Done(value)` or `Unsupported(id)`. The calling thread is
  described by `Caller`.

## Installation

```
pip install .
```

## Example: signals

```python
from tgkernel.context import LocalContext
from tgkernel.signal_defs import SignalAction, SignalNo
from tgkernel.signals import SignalImpl

ctx = LocalContext.user(0x1000)
signals = SignalImpl()
signals.set_action(SignalNo.SIGUSR1, SignalAction(handler=0x2000, mask=0))
signals.add_signal(SignalNo.SIGUSR1)

result = signals.handle_signals(ctx)   # HANDLED: ctx.pc is 0x2000, a0 holds 10
signals.sig_return(ctx)                # True: ctx.pc is back at 0x1000
```

## Example: a blocking mutex

```python
from tgkernel.ids import ThreadId
from tgkernel.sync import MutexBlocking

mutex = MutexBlocking()
first, second = ThreadId(1), ThreadId(2)
mutex.lock(first)      # True: acquired
mutex.lock(second)     # False: the caller should block this thread
mutex.unlock()         # ThreadId(2): wake it, the lock passes to it
```

## Example: system-call dispatch

```python
from tgkernel.syscall_ids import parse_syscall_header
from tgkernel.syscall_kernel import Caller, SyscallDispatcher

ids = parse_syscall_header("#define __NR_write 64\n")

class Console:
    def write(self, caller, fd, buf, count):
        return count

dispatcher = SyscallDispatcher(ids)
dispatcher.init_io(Console())
dispatcher.handle(Caller(entity=1, flow=1), 64, [1, 0x8000, 5, 0, 0, 0])  # Done(value=5)
dispatcher.handle(Caller(entity=1, flow=1), 999, [0] * 6)                 # Unsupported
```

## What this package does not do

- It does not run anything on a machine. No code executes on a CPU, no
  registers are switched and no firmware is called. `LocalContext` only holds
  values.
- It has no page tables, address spaces, file system, device drivers or
  console I/O.
- It ships no concrete task container or scheduler. `PManager` and
  `PThreadManager` need an object that implements `Manage` and `Schedule`,
  and you supply it.
- It provides no system-call numbers of its own. You pass them to
  `SyscallDispatcher` through `parse_syscall_header` or a mapping.
- It has no command-line program.

## Running the tests

```
pip install .[test]
pytest
```