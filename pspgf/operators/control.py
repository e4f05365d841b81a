# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PostScript execution and control operators.

Execution is recursive: running a procedure calls back into the dispatcher
for each of its elements, and the control operators (if, for, stopped, ...)
run their procedures through the same entry point. ctxt.exec_depth counts
the nesting and a limitcheck is raised past ctxt.MaxExecDepth, before the
host stack runs out.

Two kinds of object are dispatched differently:

- objects met while running a procedure body or reading a file
  (execute_token): executable arrays are pushed, everything else is
  executed;
- objects executed directly (execute): executable arrays run.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core import error as ps_error
from ..core import types as ps
from ..core.tokenizer import parse

logger = logging.getLogger(__name__)


class ExitLoop(Exception):
    """Raised by exit; caught by the innermost looping operator."""


class StopExecution(Exception):
    """Raised by stop; caught by the innermost stopped."""


class QuitJob(Exception):
    """Raised by quit; ends the job normally."""


def execute(ctxt: ps.Context, obj: ps.PSObject) -> None:
    """Execute `obj` as the exec operator would."""
    if obj.attrib != ps.ATTRIB_EXEC:
        ctxt.o_stack.append(obj)
        return

    obj_type = obj.TYPE
    if obj_type == ps.T_OPERATOR:
        try:
            obj.val(ctxt, ctxt.o_stack)
        except ps_error.PSError as err:
            if err.command is None:
                err.command = obj.name.decode("latin-1")
            raise
    elif obj_type == ps.T_NAME:
        value = ctxt.d_stack.lookup(obj)
        if value is None:
            ctxt.o_stack.append(obj)
            raise ps_error.PSError(ps_error.UNDEFINED, obj.val.decode("latin-1"))
        execute(ctxt, value)
    elif obj_type == ps.T_ARRAY:
        run_procedure(ctxt, obj)
    elif obj_type == ps.T_STRING:
        if not obj.can_execute():
            raise ps_error.e(ps_error.INVALIDACCESS, "exec")
        run_file(ctxt, ps.File(obj.byte_string(), "%string", ps.ATTRIB_EXEC))
    elif obj_type == ps.T_FILE:
        run_file(ctxt, obj)
    elif obj_type == ps.T_NULL:
        pass
    else:
        ctxt.o_stack.append(obj)


def execute_token(ctxt: ps.Context, obj: ps.PSObject) -> None:
    """Dispatch one object read from a procedure body or a file."""
    if obj.TYPE == ps.T_ARRAY or obj.attrib != ps.ATTRIB_EXEC:
        ctxt.o_stack.append(obj)
    else:
        execute(ctxt, obj)


def _enter(ctxt: ps.Context) -> None:
    if ctxt.exec_depth >= ctxt.MaxExecDepth:
        raise ps_error.PSError(
            ps_error.LIMITCHECK, detail=f"execution nested deeper than {ctxt.MaxExecDepth}"
        )
    ctxt.exec_depth += 1


def run_procedure(ctxt: ps.Context, proc: ps.Array) -> None:
    if not proc.can_execute():
        raise ps_error.e(ps_error.INVALIDACCESS, "exec")
    _enter(ctxt)
    try:
        for obj in proc.items():
            execute_token(ctxt, obj)
    finally:
        ctxt.exec_depth -= 1


def run_file(ctxt: ps.Context, source: ps.File) -> None:
    _enter(ctxt)
    ctxt.file_stack.append(source)
    try:
        for obj in parse(source):
            execute_token(ctxt, obj)
    finally:
        ctxt.file_stack.pop()
        ctxt.exec_depth -= 1


def _dump_stacks(ctxt: ps.Context, err: ps_error.PSError) -> None:
    logger.error("PostScript error %s", err)
    logger.error("Operand stack (bottom to top): %s", ctxt.o_stack)
    names = [d.name.decode("latin-1") or "-dict-" for d in ctxt.d_stack]
    logger.error("Dictionary stack (bottom to top): %s", " ".join(names))


def execjob(ctxt: ps.Context, objects: Iterable[ps.PSObject], source: Optional[ps.File] = None) -> None:
    """
    Run a complete document.

    The output device is initialised first and finished last, also when an
    error aborts the run, so the output stays well formed. Any error that
    reaches this level is logged together with the operand and dictionary
    stacks and then re-raised to the caller.
    """
    ctxt.device.init(ctxt.gstate)
    if source is not None:
        ctxt.file_stack.append(source)
    try:
        for obj in objects:
            execute_token(ctxt, obj)
    except StopExecution:
        logger.warning("stop executed outside of any stopped context, job ended")
    except QuitJob:
        pass
    except ExitLoop:
        err = ps_error.PSError(ps_error.INVALIDEXIT, "exit")
        _dump_stacks(ctxt, err)
        ctxt.device.finish()
        raise err from None
    except RecursionError:
        err = ps_error.PSError(ps_error.LIMITCHECK, detail="host recursion limit reached")
        _dump_stacks(ctxt, err)
        ctxt.device.finish()
        raise err from None
    except ps_error.PSError as err:
        _dump_stacks(ctxt, err)
        ctxt.device.finish()
        raise
    finally:
        if source is not None and ctxt.file_stack:
            ctxt.file_stack.pop()
    ctxt.device.finish()


def ps_exec(ctxt, ostack):
    """
    any **exec** -


    pushes the operand on the execution stack, executing it immediately. The effect of
    executing an object depends on the object's type and literal/executable attribute.
    In particular, executing a literal object will cause it only to be pushed back on
    the operand stack.

    **Errors**:     **invalidaccess**, **stackunderflow**
    **See Also**:   **xcheck**, **cvx**, **run**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, ps_exec.__name__)

    execute(ctxt, ostack.pop())


def ps_if(ctxt, ostack):
    """
    bool proc **if** -


    removes both operands from the stack, then executes proc if bool is true.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **ifelse**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, ps_if.__name__)
    # 2. TYPECHECK - Check operand types (boolean procedure)
    condition = ostack[-2].to_bool()
    proc = ostack[-1].to_proc()

    ostack.pop()
    ostack.pop()
    if condition:
        execute(ctxt, proc)


def ifelse(ctxt, ostack):
    """
    bool proc₁ proc₂ **ifelse** -


    removes all three operands from the stack, then executes proc₁ if bool is true or
    proc₂ if bool is false.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **if**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 3:
        raise ps_error.e(ps_error.STACKUNDERFLOW, ifelse.__name__)
    # 2. TYPECHECK - Check operand types (boolean procedure procedure)
    condition = ostack[-3].to_bool()
    proc1 = ostack[-2].to_proc()
    proc2 = ostack[-1].to_proc()

    del ostack[-3:]
    execute(ctxt, proc1 if condition else proc2)


def ps_for(ctxt, ostack):
    """
    initial increment limit proc **for** -


    executes proc repeatedly, passing it a sequence of values from initial by steps of
    increment to limit. The **for** operator expects initial, increment, and limit to be
    numbers. It maintains a temporary internal variable, known as the control variable,
    which it first sets to initial. Then, before each repetition, it compares the control
    variable to the limit value. If limit has not been exceeded, **for** pushes the control
    variable on the operand stack, executes proc, and adds increment to the control variable.

    The control variable is an integer if initial and increment are both integers, a
    real otherwise. A zero increment, or an increment pointing away from limit, runs
    proc no times at all.

    **Examples**
        0 1 1 4 {add} **for**       -> 10
        1 2 6 { } **for**           -> 1 3 5
        3 -.5 1 { } **for**         -> 3.0 2.5 2.0 1.5 1.0

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **repeat**, **loop**, **forall**, **exit**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 4:
        raise ps_error.e(ps_error.STACKUNDERFLOW, ps_for.__name__)
    # 2. TYPECHECK - Check operand types (num num num proc)
    for obj in ostack[-4:-1]:
        if obj.TYPE not in ps.NUMERIC_TYPES:
            raise ps_error.e(ps_error.TYPECHECK, ps_for.__name__)
    proc = ostack[-1].to_proc()

    initial, increment, limit = ostack[-4], ostack[-3], ostack[-2]
    del ostack[-4:]

    if increment.TYPE == ps.T_INT and initial.TYPE == ps.T_INT:
        control, step = initial.val, increment.val
    else:
        control, step = initial.to_real(), increment.to_real()
    end = limit.val

    if step == 0:
        return

    try:
        while (step > 0 and control <= end) or (step < 0 and control >= end):
            ostack.append(ps.number(control))
            execute(ctxt, proc)
            control += step
    except ExitLoop:
        pass


def repeat(ctxt, ostack):
    """
    int proc **repeat** -


    executes proc int times, where int is a nonnegative integer. The operand stack is
    not otherwise affected.

    **Errors**:     **rangecheck**, **stackunderflow**, **typecheck**
    **See Also**:   **for**, **loop**, **forall**, **exit**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, repeat.__name__)
    # 2. TYPECHECK - Check operand types (int proc)
    count = ostack[-2].to_non_neg_int()
    proc = ostack[-1].to_proc()

    ostack.pop()
    ostack.pop()
    try:
        for _ in range(count):
            execute(ctxt, proc)
    except ExitLoop:
        pass


def loop(ctxt, ostack):
    """
    proc **loop** -


    repeatedly executes proc until proc executes the **exit** operator, at which point
    interpretation resumes at the object next in sequence after the **loop**.

    **Errors**:     **stackunderflow**, **typecheck**
    **See Also**:   **for**, **repeat**, **forall**, **exit**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, loop.__name__)
    proc = ostack[-1].to_proc()

    ostack.pop()
    try:
        while True:
            execute(ctxt, proc)
    except ExitLoop:
        pass


def forall(ctxt, ostack):
    """
    array proc **forall** -
    dict proc **forall** -
    string proc **forall** -


    enumerates the elements of the first operand, executing the procedure proc for
    each element. For an array or string each element is pushed before proc runs
    (string elements as integers); for a dictionary the key and then the value are
    pushed.

    **Errors**:     **invalidaccess**, **stackunderflow**, **typecheck**
    **See Also**:   **for**, **repeat**, **loop**, **exit**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 2:
        raise ps_error.e(ps_error.STACKUNDERFLOW, forall.__name__)
    # 2. TYPECHECK - Check operand types
    container = ostack[-2]
    proc = ostack[-1].to_proc()
    if container.TYPE not in (ps.T_ARRAY, ps.T_STRING) and container.TYPE not in ps.DICT_TYPES:
        raise ps_error.e(ps_error.TYPECHECK, forall.__name__)
    # 3. INVALIDACCESS - Check read access
    if not container.can_read():
        raise ps_error.e(ps_error.INVALIDACCESS, forall.__name__)

    ostack.pop()
    ostack.pop()
    try:
        if container.TYPE == ps.T_ARRAY:
            for item in container.items():
                ostack.append(item)
                execute(ctxt, proc)
        elif container.TYPE == ps.T_STRING:
            for byte in container.byte_string():
                ostack.append(ps.Int(byte))
                execute(ctxt, proc)
        else:
            for key, value in container.items():
                ostack.append(key)
                ostack.append(value)
                execute(ctxt, proc)
    except ExitLoop:
        pass


def ps_exit(ctxt, ostack):
    """
    - **exit** -


    terminates execution of the innermost, dynamically enclosing instance of a looping
    context, without regard to lexical relationship. A looping context is a procedure
    invoked repeatedly by one of the control operators **for**, **forall**, **loop**
    or **repeat**.

    **Errors**:     **invalidexit**
    **See Also**:   **stop**, **stopped**
    """
    raise ExitLoop()


def stop(ctxt, ostack):
    """
    - **stop** -


    terminates execution of the innermost, dynamically enclosing instance of a
    **stopped** context, without regard to lexical relationship.

    **Errors**:     **none**
    **See Also**:   **stopped**, **exit**
    """
    raise StopExecution()


def stopped(ctxt, ostack):
    """
    any **stopped** bool


    executes any, which is typically, but not necessarily, a procedure, executable file,
    or executable string object. If any runs to completion normally, **stopped** returns
    false on the operand stack. If any terminates prematurely as a result of executing
    **stop**, or of an error, **stopped** returns true.

    An unimplemented error is not caught: it reports a capability missing from the
    interpreter rather than a fault of the program, so it always reaches the caller.
    The name of a caught error and its command are recorded in $error.

    **Errors**:     **stackunderflow**
    **See Also**:   **stop**
    """
    # 1. STACKUNDERFLOW - Check stack depth
    if len(ostack) < 1:
        raise ps_error.e(ps_error.STACKUNDERFLOW, stopped.__name__)

    obj = ostack.pop()
    try:
        execute(ctxt, obj)
    except StopExecution:
        ostack.append(ps.Bool(True))
    except ExitLoop:
        _record_error(ctxt, ps_error.PSError(ps_error.INVALIDEXIT, "exit"))
        ostack.append(ps.Bool(True))
    except ps_error.PSError as err:
        if err.code == ps_error.UNIMPLEMENTED:
            raise
        _record_error(ctxt, err)
        ostack.append(ps.Bool(True))
    else:
        ostack.append(ps.Bool(False))


def _record_error(ctxt: ps.Context, err: ps_error.PSError) -> None:
    error_info = ctxt.error_info
    if error_info is None:
        return
    error_info.put_bytes(b"newerror", ps.Bool(True))
    error_info.put_bytes(b"errorname", ps.Name(err.name))
    error_info.put_bytes(b"command", ps.Name(err.command or ""))


def quit(ctxt, ostack):
    """
    - **quit** -


    terminates operation of the interpreter.

    **Errors**:     **none**
    **See Also**:   **stop**
    """
    raise QuitJob()
