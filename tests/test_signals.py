from tgkernel.context import LocalContext
from tgkernel.signal_defs import SignalAction, SignalNo
from tgkernel.signals import SignalImpl, SignalResult, SignalResultKind, default_action


def test_default_action_ignores_chld_and_urg():
    assert default_action(SignalNo.SIGCHLD).kind is SignalResultKind.IGNORED
    assert default_action(SignalNo.SIGURG).kind is SignalResultKind.IGNORED


def test_default_action_kills_with_negated_number():
    result = default_action(SignalNo.SIGTERM)
    assert result == SignalResult(SignalResultKind.PROCESS_KILLED, -int(SignalNo.SIGTERM))


def test_no_signal():
    sig = SignalImpl()
    assert sig.handle_signals(LocalContext.empty()).kind is SignalResultKind.NO_SIGNAL


def test_kill_and_stop_cannot_be_caught():
    sig = SignalImpl()
    action = SignalAction(handler=0x1000)
    assert sig.set_action(SignalNo.SIGKILL, action) is False
    assert sig.set_action(SignalNo.SIGSTOP, action) is False
    assert sig.get_action(SignalNo.SIGKILL) is None
    assert sig.get_action(SignalNo.SIGSTOP) is None


def test_get_action_defaults_then_returns_installed():
    sig = SignalImpl()
    assert sig.get_action(SignalNo.SIGUSR1) == SignalAction()
    action = SignalAction(handler=0x2000, mask=1)
    assert sig.set_action(SignalNo.SIGUSR1, action) is True
    assert sig.get_action(SignalNo.SIGUSR1) == action


def test_unhandled_signal_uses_default_action():
    sig = SignalImpl()
    sig.add_signal(SignalNo.SIGTERM)
    result = sig.handle_signals(LocalContext.empty())
    assert result == default_action(SignalNo.SIGTERM)
    assert sig.handle_signals(LocalContext.empty()).kind is SignalResultKind.NO_SIGNAL


def test_sigkill_kills_even_with_handlers():
    sig = SignalImpl()
    sig.add_signal(SignalNo.SIGKILL)
    result = sig.handle_signals(LocalContext.empty())
    assert result.kind is SignalResultKind.PROCESS_KILLED
    assert result.exit_code == -int(SignalNo.SIGKILL)


def test_stop_then_continue():
    sig = SignalImpl()
    ctx = LocalContext.empty()
    sig.add_signal(SignalNo.SIGSTOP)
    assert sig.handle_signals(ctx).kind is SignalResultKind.PROCESS_SUSPENDED
    assert sig.is_handling_signal()
    assert sig.handle_signals(ctx).kind is SignalResultKind.PROCESS_SUSPENDED
    sig.add_signal(SignalNo.SIGCONT)
    assert sig.handle_signals(ctx).kind is SignalResultKind.HANDLED
    assert not sig.is_handling_signal()


def test_masked_sigcont_keeps_process_frozen():
    sig = SignalImpl()
    ctx = LocalContext.empty()
    sig.add_signal(SignalNo.SIGSTOP)
    sig.handle_signals(ctx)
    sig.update_mask(1 << int(SignalNo.SIGCONT))
    sig.add_signal(SignalNo.SIGCONT)
    assert sig.handle_signals(ctx).kind is SignalResultKind.PROCESS_SUSPENDED


def test_user_handler_and_sig_return():
    sig = SignalImpl()
    sig.set_action(SignalNo.SIGUSR1, SignalAction(handler=0x4000))
    ctx = LocalContext.user(0x1000)
    ctx.set_a(0, 42)
    sig.add_signal(SignalNo.SIGUSR1)

    assert sig.handle_signals(ctx).kind is SignalResultKind.HANDLED
    assert ctx.pc == 0x4000
    assert ctx.a(0) == int(SignalNo.SIGUSR1)
    assert sig.is_handling_signal()

    sig.add_signal(SignalNo.SIGUSR2)
    assert sig.handle_signals(ctx).kind is SignalResultKind.IS_HANDLING_SIGNAL

    assert sig.sig_return(ctx) is True
    assert ctx.pc == 0x1000
    assert ctx.a(0) == 42
    assert not sig.is_handling_signal()


def test_sig_return_without_handler_fails():
    sig = SignalImpl()
    ctx = LocalContext.user(0x1000)
    assert sig.sig_return(ctx) is False
    assert ctx.pc == 0x1000


def test_sig_return_while_frozen_fails_and_stays_frozen():
    sig = SignalImpl()
    sig.add_signal(SignalNo.SIGSTOP)
    sig.handle_signals(LocalContext.empty())
    assert sig.sig_return(LocalContext.empty()) is False
    assert sig.is_handling_signal()


def test_mask_blocks_delivery():
    sig = SignalImpl()
    assert sig.update_mask(1 << int(SignalNo.SIGTERM)) == 0
    sig.add_signal(SignalNo.SIGTERM)
    assert sig.handle_signals(LocalContext.empty()).kind is SignalResultKind.NO_SIGNAL
    assert sig.update_mask(0) == 1 << int(SignalNo.SIGTERM)
    assert sig.handle_signals(LocalContext.empty()).kind is SignalResultKind.PROCESS_KILLED


def test_lowest_signal_delivered_first():
    sig = SignalImpl()
    sig.add_signal(SignalNo.SIGTERM)
    sig.add_signal(SignalNo.SIGINT)
    first = sig.handle_signals(LocalContext.empty())
    second = sig.handle_signals(LocalContext.empty())
    assert first.exit_code == -int(SignalNo.SIGINT)
    assert second.exit_code == -int(SignalNo.SIGTERM)


def test_from_fork_inherits_actions_and_mask_only():
    parent = SignalImpl()
    action = SignalAction(handler=0x5000)
    parent.set_action(SignalNo.SIGUSR2, action)
    parent.update_mask(1 << int(SignalNo.SIGHUP))
    parent.add_signal(SignalNo.SIGTERM)

    child = parent.from_fork()
    assert child.get_action(SignalNo.SIGUSR2) == action
    assert child.update_mask(0) == 1 << int(SignalNo.SIGHUP)
    assert child.handle_signals(LocalContext.empty()).kind is SignalResultKind.NO_SIGNAL

    child.set_action(SignalNo.SIGUSR2, SignalAction(handler=0x6000))
    assert parent.get_action(SignalNo.SIGUSR2) == action


def test_clear_drops_handlers():
    sig = SignalImpl()
    sig.set_action(SignalNo.SIGUSR1, SignalAction(handler=0x4000))
    sig.clear()
    assert sig.get_action(SignalNo.SIGUSR1) == SignalAction()
    sig.add_signal(SignalNo.SIGUSR1)
    result = sig.handle_signals(LocalContext.empty())
    assert result.kind is SignalResultKind.PROCESS_KILLED