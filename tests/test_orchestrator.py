from asyncio import get_running_loop, sleep
from unittest import IsolatedAsyncioTestCase

from pynvim_pp.logging import log

from dap_cmp.dap.types import DAPError
from dap_cmp.server.orchestrator import Orchestrator
from dap_cmp.shared.types import EMPTY, STALE, ItemKind

from .fakes import CAPABLE, EDITOR, REPL, FakeSession, context, finder, settings

_TARGETS = {"targets": [{"label": "x", "type": "variable"}]}


class NotDapBuffer(IsolatedAsyncioTestCase):
    async def test_1(self) -> None:
        session = FakeSession(capabilities=CAPABLE, replies={"completions": _TARGETS})
        found = []

        async def find():
            found.append(True)
            return session

        orchestrator = Orchestrator(settings(), find=find)
        outcome = await orchestrator.complete(EDITOR, context=context("x"))
        self.assertEqual(outcome, EMPTY)
        self.assertEqual(found, [])
        self.assertEqual(tuple(session.calls), ())


class Live(IsolatedAsyncioTestCase):
    async def test_1(self) -> None:
        session = FakeSession(
            capabilities=CAPABLE, current_frame=3, replies={"completions": _TARGETS}
        )
        orchestrator = Orchestrator(settings(), find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("x"))

        self.assertFalse(outcome.is_incomplete)
        (item,) = outcome.items
        self.assertEqual(item.label, "x")
        self.assertEqual(item.kind, ItemKind.variable)
        self.assertEqual(item.insert_text, "x")

        (call,) = session.calls
        self.assertEqual(
            call, ("completions", {"frameId": 3, "text": "x", "column": 1, "line": 0})
        )

    async def test_2(self) -> None:
        session = FakeSession(capabilities=CAPABLE, replies={"completions": _TARGETS})
        orchestrator = Orchestrator(settings(), find=finder(session))
        await orchestrator.complete(REPL, context=context("x"))

        (call,) = session.calls
        _, arguments = call
        self.assertNotIn("frameId", arguments)

    async def test_3(self) -> None:
        session = FakeSession(
            capabilities=CAPABLE, replies={"completions": {"targets": []}}
        )
        orchestrator = Orchestrator(settings(), find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("x"))
        self.assertEqual(outcome, EMPTY)

    async def test_4(self) -> None:
        session = FakeSession(capabilities=CAPABLE, replies={"completions": {}})
        orchestrator = Orchestrator(settings(), find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("x"))
        self.assertEqual(outcome, EMPTY)

    async def test_5(self) -> None:
        session = FakeSession(capabilities=CAPABLE, replies={"completions": None})
        orchestrator = Orchestrator(settings(), find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("x"))
        self.assertEqual(outcome, EMPTY)

    async def test_6(self) -> None:
        targets = {
            "targets": [
                {"label": "foo", "text": "foo($1)", "type": "function"},
                {"label": "bar", "type": "property", "sortText": "b"},
            ]
        }
        session = FakeSession(capabilities=CAPABLE, replies={"completions": targets})
        orchestrator = Orchestrator(settings(), find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("f"))

        foo, bar = outcome.items
        self.assertTrue(foo.is_snippet)
        self.assertEqual(foo.kind, ItemKind.function)
        self.assertFalse(bar.is_snippet)
        self.assertEqual(bar.kind, ItemKind.property)
        self.assertEqual(bar.sort_text, "b")

    async def test_7(self) -> None:
        targets = {"targets": [{"label": "red", "type": "color"}]}
        session = FakeSession(capabilities=CAPABLE, replies={"completions": targets})
        conf = settings({"kind_mapping": {"color": "Value"}})
        orchestrator = Orchestrator(conf, find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("r"))
        (item,) = outcome.items
        self.assertEqual(item.kind, ItemKind.value)


class Timeout(IsolatedAsyncioTestCase):
    async def test_1(self) -> None:
        session = FakeSession(
            capabilities=CAPABLE,
            replies={"completions": _TARGETS},
            delays={"completions": 0.3},
        )
        conf = settings({"completion": {"timeout": 0.05}})
        orchestrator = Orchestrator(conf, find=finder(session))

        with self.assertLogs(log, level="WARNING"):
            outcome = await orchestrator.complete(REPL, context=context("x"))
        self.assertEqual(outcome, STALE)

        await sleep(0.4)
        self.assertEqual(tuple(session.answered), ())

    async def test_2(self) -> None:
        session = FakeSession(
            capabilities=CAPABLE,
            replies={"completions": _TARGETS},
            delays={"completions": 0.01},
        )
        conf = settings({"completion": {"timeout": 1.0}})
        orchestrator = Orchestrator(conf, find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("x"))
        self.assertEqual(len(outcome.items), 1)
        self.assertFalse(outcome.is_incomplete)


class ProtocolError(IsolatedAsyncioTestCase):
    async def test_1(self) -> None:
        session = FakeSession(
            capabilities=CAPABLE, replies={"completions": DAPError("boom")}
        )
        conf = settings({"fallback": {"enabled": False}})
        orchestrator = Orchestrator(conf, find=finder(session))

        with self.assertLogs(log, level="ERROR") as cm:
            outcome = await orchestrator.complete(REPL, context=context("pri"))
        self.assertEqual(outcome, EMPTY)
        self.assertIn("boom", "".join(cm.output))

    async def test_2(self) -> None:
        session = FakeSession(
            capabilities=CAPABLE, replies={"completions": DAPError("boom")}
        )
        conf = settings({"fallback": {"variables": False}})
        orchestrator = Orchestrator(conf, find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("pri"))
        self.assertFalse(outcome.is_incomplete)
        self.assertEqual([item.label for item in outcome.items], ["print"])


class CapabilityGap(IsolatedAsyncioTestCase):
    async def test_1(self) -> None:
        session = FakeSession(capabilities={}, replies={"completions": _TARGETS})
        conf = settings({"fallback": {"variables": False}})
        orchestrator = Orchestrator(conf, find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("pri"))

        self.assertEqual([item.label for item in outcome.items], ["print"])
        self.assertFalse(outcome.is_incomplete)
        self.assertEqual(tuple(session.calls), ())

    async def test_2(self) -> None:
        conf = settings({"fallback": {"enabled": False}})
        orchestrator = Orchestrator(conf, find=finder(None))
        outcome = await orchestrator.complete(REPL, context=context("pri"))
        self.assertEqual(outcome, EMPTY)

    async def test_3(self) -> None:
        orchestrator = Orchestrator(settings(), find=finder(None))
        outcome = await orchestrator.complete(REPL, context=context("b"))
        labels = [item.label for item in outcome.items]
        self.assertEqual(labels, ["backtrace", "bt", "break"])

    async def test_4(self) -> None:
        session = FakeSession(capabilities=None, uid=12)
        conf = settings({"fallback": {"variables": False}})
        orchestrator = Orchestrator(conf, find=finder(session))

        with self.assertLogs(log, level="WARNING") as cm:
            for _ in range(3):
                await orchestrator.complete(REPL, context=context("p"))
            log.warning("%s", "sentinel")

        warnings = [line for line in cm.output if "does not support" in line]
        self.assertEqual(len(warnings), 1)

    async def test_5(self) -> None:
        first = FakeSession(capabilities=None, uid=1)
        second = FakeSession(capabilities=None, uid=2)
        sessions = iter((first, first, second))

        async def find():
            return next(sessions)

        conf = settings({"fallback": {"variables": False}})
        orchestrator = Orchestrator(conf, find=find)

        with self.assertLogs(log, level="WARNING") as cm:
            for _ in range(3):
                await orchestrator.complete(REPL, context=context("p"))

        warnings = [line for line in cm.output if "does not support" in line]
        self.assertEqual(len(warnings), 2)


class Deadline(IsolatedAsyncioTestCase):
    async def test_1(self) -> None:
        session = FakeSession(
            capabilities=CAPABLE,
            current_frame=1,
            replies={
                "completions": DAPError("late"),
                "scopes": {"scopes": [{"name": "Locals", "variablesReference": 7}]},
                "variables": {"variables": [{"name": "count", "value": "1"}]},
            },
            delays={"completions": 0.15, "scopes": 0.15},
        )
        conf = settings({"completion": {"timeout": 0.2}})
        orchestrator = Orchestrator(conf, find=finder(session))

        loop = get_running_loop()
        start = loop.time()
        with self.assertLogs(log, level="ERROR"):
            outcome = await orchestrator.complete(REPL, context=context("pri"))
        elapsed = loop.time() - start

        self.assertLess(elapsed, 0.28)
        labels = [item.label for item in outcome.items]
        self.assertEqual(labels, ["print"])
        self.assertNotIn("scopes", session.answered)

    async def test_2(self) -> None:
        session = FakeSession(
            capabilities=None,
            current_frame=1,
            replies={
                "scopes": {"scopes": [{"name": "Locals", "variablesReference": 7}]},
                "variables": {"variables": [{"name": "count", "value": "1"}]},
            },
        )
        conf = settings({"completion": {"timeout": 1.0}})
        orchestrator = Orchestrator(conf, find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("c"))

        labels = [item.label for item in outcome.items]
        self.assertIn("count", labels)


class MalformedTargets(IsolatedAsyncioTestCase):
    async def test_1(self) -> None:
        targets = {
            "targets": [
                {"label": 3, "type": "variable"},
                {"label": "good", "type": "variable"},
                {"label": "doc", "documentation": {"kind": "markdown", "value": "x"}},
            ]
        }
        session = FakeSession(capabilities=CAPABLE, replies={"completions": targets})
        orchestrator = Orchestrator(settings(), find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("g"))

        self.assertFalse(outcome.is_incomplete)
        self.assertEqual([item.label for item in outcome.items], ["good"])

    async def test_2(self) -> None:
        targets = {"targets": [{"label": 3}, {"documentation": []}]}
        session = FakeSession(capabilities=CAPABLE, replies={"completions": targets})
        orchestrator = Orchestrator(settings(), find=finder(session))
        outcome = await orchestrator.complete(REPL, context=context("g"))
        self.assertEqual(outcome, EMPTY)
