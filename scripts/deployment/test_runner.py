#!/usr/bin/env python3
"""
Tests for the sequential deployment runner
"""

import pytest

from scripts.deployment.errors import DeploymentError, DeploymentRejected
from scripts.deployment.runner import (
    DeploymentResult,
    DeploymentRunner,
    DeploymentSpec,
    RunOutcome,
    RunState,
    run,
)

TOKEN_ADDRESS = "0xAAA0000000000000000000000000000000000001"
FACTORY_ADDRESS = "0xBBB0000000000000000000000000000000000002"


class FakeBackend:
    """Backend returning queued addresses, optionally failing on one call"""

    def __init__(self, addresses, fail_at=None, error=None):
        self.addresses = list(addresses)
        self.fail_at = fail_at
        self.error = error or DeploymentRejected("execution reverted")
        self.calls = []

    def deploy(self, name, constructor_args):
        self.calls.append((name, tuple(constructor_args)))
        if self.fail_at is not None and len(self.calls) == self.fail_at:
            raise self.error
        return self.addresses[len(self.calls) - 1]


class TestDeploymentRunner:
    """Test class for DeploymentRunner"""

    def setup_method(self):
        self.specs = [DeploymentSpec("NalndaToken"), DeploymentSpec("MarketplaceFactory")]

    def test_all_deployments_succeed(self, capsys):
        """Scenario A: both contracts deploy and are printed in order"""
        backend = FakeBackend([TOKEN_ADDRESS, FACTORY_ADDRESS])
        outcome = run(self.specs, backend)

        assert outcome.success is True
        assert outcome.exit_code == 0
        assert [r.address for r in outcome.results] == [TOKEN_ADDRESS, FACTORY_ADDRESS]
        assert [r.spec for r in outcome.results] == self.specs
        assert outcome.failure is None

        out = capsys.readouterr().out.splitlines()
        assert out == [
            f"NalndaToken deployed to: {TOKEN_ADDRESS}",
            f"MarketplaceFactory deployed to: {FACTORY_ADDRESS}",
        ]

    def test_first_failure_stops_run(self, capsys):
        """Scenario B: failing token deployment never attempts the factory"""
        backend = FakeBackend([TOKEN_ADDRESS, FACTORY_ADDRESS], fail_at=1)
        outcome = run(self.specs, backend)

        assert outcome.success is False
        assert outcome.exit_code == 1
        assert len(outcome.results) == 1
        assert outcome.results[0].address is None
        assert isinstance(outcome.results[0].error, DeploymentRejected)
        assert backend.calls == [("NalndaToken", ())]
        assert capsys.readouterr().out == ""

    @pytest.mark.parametrize("k", [1, 2, 3, 4])
    def test_failure_at_kth_spec(self, k):
        """Failing on spec k yields k results and k backend calls"""
        specs = [DeploymentSpec(f"Contract{i}") for i in range(4)]
        backend = FakeBackend([f"0x{i}" for i in range(4)], fail_at=k)
        outcome = run(specs, backend)

        assert len(outcome.results) == k
        assert len(backend.calls) == k
        assert all(r.succeeded for r in outcome.results[:k - 1])
        assert not outcome.results[-1].succeeded
        assert outcome.failure is outcome.results[-1]
        assert outcome.addresses == {f"Contract{i}": f"0x{i}" for i in range(k - 1)}

    def test_constructor_args_passed_in_order(self):
        """Constructor arguments reach the backend unchanged"""
        specs = [DeploymentSpec("NalndaToken", ("Nalnda", 18)), DeploymentSpec("MarketplaceFactory")]
        backend = FakeBackend([TOKEN_ADDRESS, FACTORY_ADDRESS])
        run(specs, backend)
        assert backend.calls == [("NalndaToken", ("Nalnda", 18)), ("MarketplaceFactory", ())]

    def test_unexpected_exception_is_wrapped(self):
        """Non-deployment errors from the backend are recorded as DeploymentError"""
        backend = FakeBackend([TOKEN_ADDRESS], fail_at=1, error=RuntimeError("boom"))
        outcome = run(self.specs, backend)

        error = outcome.results[0].error
        assert type(error) is DeploymentError
        assert error.resource == "NalndaToken"
        assert isinstance(error.__cause__, RuntimeError)
        assert str(error) == "NalndaToken: boom"

    @pytest.mark.parametrize("missing", [None, ""])
    def test_missing_address_is_a_failure(self, missing, capsys):
        """A backend returning no address fails the run at that contract"""
        backend = FakeBackend([missing, FACTORY_ADDRESS])
        outcome = run(self.specs, backend)

        assert outcome.success is False
        assert outcome.exit_code == 1
        assert len(outcome.results) == 1
        assert outcome.failure is outcome.results[0]
        assert isinstance(outcome.results[0].error, DeploymentRejected)
        assert outcome.results[0].error.resource == "NalndaToken"
        assert backend.calls == [("NalndaToken", ())]
        assert capsys.readouterr().out == ""

    def test_state_transitions(self):
        """Runner moves NOT_STARTED -> RUNNING -> COMPLETED/FAILED"""
        runner = DeploymentRunner(self.specs)
        assert runner.state is RunState.NOT_STARTED

        states = []

        class ObservingBackend(FakeBackend):
            def deploy(self, name, constructor_args):
                states.append(runner.state)
                return super().deploy(name, constructor_args)

        runner.run(ObservingBackend([TOKEN_ADDRESS, FACTORY_ADDRESS]))
        assert states == [RunState.RUNNING, RunState.RUNNING]
        assert runner.state is RunState.COMPLETED

        runner.run(FakeBackend([TOKEN_ADDRESS], fail_at=2))
        assert runner.state is RunState.FAILED

    def test_repeated_runs_are_independent(self):
        """Running twice produces separate outcomes with no shared results"""
        runner = DeploymentRunner(self.specs)
        first = runner.run(FakeBackend([TOKEN_ADDRESS, FACTORY_ADDRESS]))
        second = runner.run(FakeBackend(["0x1", "0x2"]))

        assert first is not second
        assert [r.address for r in first.results] == [TOKEN_ADDRESS, FACTORY_ADDRESS]
        assert [r.address for r in second.results] == ["0x1", "0x2"]

    def test_empty_specs_rejected(self):
        """A run needs at least one spec"""
        with pytest.raises(ValueError):
            DeploymentRunner([])


class TestDataModel:
    """Test class for result types"""

    def test_result_is_immutable(self):
        """DeploymentResult cannot be modified after creation"""
        result = DeploymentResult(spec=DeploymentSpec("NalndaToken"), address=TOKEN_ADDRESS)
        with pytest.raises(AttributeError):
            result.address = FACTORY_ADDRESS

    def test_outcome_failure_none_when_successful(self):
        """Successful outcome has no failure and exit code 0"""
        outcome = RunOutcome(
            results=(DeploymentResult(spec=DeploymentSpec("NalndaToken"), address=TOKEN_ADDRESS),),
            success=True,
        )
        assert outcome.failure is None
        assert outcome.addresses == {"NalndaToken": TOKEN_ADDRESS}
