"""
Tests for scalar and service rule evaluation.
"""

import pytest

from hostguard.compliance import RuleEvaluator, ServiceState, Severity, SettingSpec
from hostguard.compliance.rules import values_match

SHELL_TIMEOUT = SettingSpec("UserVars.ESXiShellTimeOut", 900, label="Shell timeout")


class TestValuesMatch:
    @pytest.mark.parametrize(
        "current,target,expected",
        [
            (900, 900, True),
            ("900", 900, True),
            (" 900 ", 900, True),
            (600, 900, False),
            ("abc", 900, False),
            (None, 900, False),
            ("retry=3", "retry=3", True),
            ("retry=5", "retry=3", False),
        ],
    )
    def test_values_match(self, current, target, expected):
        assert values_match(current, target) is expected


class TestScalarRule:
    def test_compliant_setting_reports_ok(self, gateway, host):
        outcome = RuleEvaluator(gateway).evaluate(host, SHELL_TIMEOUT, enforce=False)

        assert outcome.compliant is True
        assert len(outcome.messages) == 1
        assert outcome.messages[0].severity == Severity.INFO
        assert outcome.messages[0].text == "esx01.lab.local - Shell timeout: OK"

    @pytest.mark.parametrize("enforce", [False, True])
    def test_compliant_setting_never_mutates(self, gateway, host, enforce):
        RuleEvaluator(gateway).evaluate(host, SHELL_TIMEOUT, enforce=enforce)

        assert gateway.mutating_calls == []

    def test_drift_in_scan_mode(self, make_gateway, host):
        gateway = make_gateway(settings={"UserVars.ESXiShellTimeOut": 0})

        outcome = RuleEvaluator(gateway).evaluate(host, SHELL_TIMEOUT, enforce=False)

        assert outcome.compliant is False
        assert len(outcome.messages) == 1
        assert outcome.messages[0].severity == Severity.WARNING
        assert "0" in outcome.messages[0].text
        assert gateway.mutating_calls == []

    def test_drift_in_fix_mode_sets_target_once(self, make_gateway, host):
        gateway = make_gateway(settings={"UserVars.ESXiShellTimeOut": 0})

        outcome = RuleEvaluator(gateway).evaluate(host, SHELL_TIMEOUT, enforce=True)

        assert outcome.compliant is True
        assert gateway.calls_to("set_setting") == [
            ("esx01.lab.local", "UserVars.ESXiShellTimeOut", 900)
        ]
        assert outcome.messages[0].severity == Severity.WARNING
        assert "0 -> 900" in outcome.messages[0].text

    def test_fix_does_not_read_back(self, make_gateway, host):
        gateway = make_gateway(settings={"UserVars.ESXiShellTimeOut": 0})

        RuleEvaluator(gateway).evaluate(host, SHELL_TIMEOUT, enforce=True)

        assert len(gateway.calls_to("get_setting")) == 1

    def test_string_setting(self, make_gateway, host, catalog):
        spec = next(s for s in catalog.scalars if s.name == "Security.PasswordQualityControl")
        gateway = make_gateway(settings={spec.name: "retry=3 min=8"})

        outcome = RuleEvaluator(gateway).evaluate(host, spec, enforce=True)

        assert outcome.compliant is True
        assert gateway.settings[spec.name] == spec.target


class TestSshRule:
    def test_compliant_service(self, gateway, host, catalog):
        outcome = RuleEvaluator(gateway).evaluate_ssh(host, catalog.ssh_service, enforce=True)

        assert outcome.compliant is True
        assert gateway.mutating_calls == []
        assert all(m.severity == Severity.INFO for m in outcome.messages)

    def test_scan_reports_wrong_policy_without_error(self, make_gateway, host, catalog):
        gateway = make_gateway(services={"TSM-SSH": ServiceState(policy="on", running=False)})

        outcome = RuleEvaluator(gateway).evaluate_ssh(host, catalog.ssh_service, enforce=False)

        assert outcome.compliant is False
        assert any("on (expected off)" in m.text for m in outcome.messages)
        assert gateway.mutating_calls == []

    def test_scan_reports_running_service(self, make_gateway, host, catalog):
        gateway = make_gateway(services={"TSM-SSH": ServiceState(policy="off", running=True)})

        outcome = RuleEvaluator(gateway).evaluate_ssh(host, catalog.ssh_service, enforce=False)

        assert outcome.compliant is False
        assert gateway.mutating_calls == []

    def test_fix_sets_policy_and_stops(self, make_gateway, host, catalog):
        gateway = make_gateway(services={"TSM-SSH": ServiceState(policy="on", running=True)})

        outcome = RuleEvaluator(gateway).evaluate_ssh(host, catalog.ssh_service, enforce=True)

        assert outcome.compliant is True
        assert gateway.mutating_calls == [
            ("set_service_policy", "esx01.lab.local", "TSM-SSH", "off"),
            ("stop_service", "esx01.lab.local", "TSM-SSH"),
        ]

    def test_fix_stops_running_service_even_with_correct_policy(self, make_gateway, host, catalog):
        gateway = make_gateway(services={"TSM-SSH": ServiceState(policy="off", running=True)})

        outcome = RuleEvaluator(gateway).evaluate_ssh(host, catalog.ssh_service, enforce=True)

        assert outcome.compliant is True
        assert gateway.mutating_calls == [("stop_service", "esx01.lab.local", "TSM-SSH")]

    def test_fix_stops_service_when_policy_change_fails(
        self, make_gateway, host, catalog, gateway_error
    ):
        gateway = make_gateway(
            services={"TSM-SSH": ServiceState(policy="on", running=True)},
            failures={"set_service_policy": gateway_error("set service policy", "access denied")},
        )

        outcome = RuleEvaluator(gateway).evaluate_ssh(host, catalog.ssh_service, enforce=True)

        assert outcome.compliant is False
        assert gateway.calls_to("stop_service") == [("esx01.lab.local", "TSM-SSH")]
        critical = [m.text for m in outcome.messages if m.severity == Severity.CRITICAL]
        assert len(critical) == 1
        assert "access denied" in critical[0]


class TestNtpRule:
    def test_enabled_service_is_compliant(self, gateway, host, catalog):
        outcome = RuleEvaluator(gateway).evaluate_ntp(host, catalog.ntp_service, enforce=True)

        assert outcome.compliant is True
        assert gateway.calls_to("get_configured_ntp_servers") == []

    def test_scan_reports_disabled_service(self, make_gateway, host, catalog):
        gateway = make_gateway(services={"ntpd": ServiceState(policy="off", running=False)})

        outcome = RuleEvaluator(gateway).evaluate_ntp(host, catalog.ntp_service, enforce=False)

        assert outcome.compliant is False
        assert gateway.mutating_calls == []

    def test_fix_enables_when_servers_configured(self, make_gateway, host, catalog):
        gateway = make_gateway(services={"ntpd": ServiceState(policy="off", running=False)})

        outcome = RuleEvaluator(gateway).evaluate_ntp(host, catalog.ntp_service, enforce=True)

        assert outcome.compliant is True
        assert gateway.mutating_calls == [
            ("set_service_policy", "esx01.lab.local", "ntpd", "on")
        ]

    def test_fix_without_servers_does_not_enable(self, make_gateway, host, catalog):
        gateway = make_gateway(
            services={"ntpd": ServiceState(policy="off", running=False)}, ntp_servers=[]
        )

        outcome = RuleEvaluator(gateway).evaluate_ntp(host, catalog.ntp_service, enforce=True)

        assert outcome.compliant is False
        assert gateway.calls_to("set_service_policy") == []
        assert "no NTP servers" in outcome.messages[0].text

    def test_fix_with_unreadable_servers_does_not_enable(
        self, make_gateway, host, catalog, gateway_error
    ):
        gateway = make_gateway(
            services={"ntpd": ServiceState(policy="off", running=False)},
            ntp_servers=gateway_error("get NTP servers"),
        )

        outcome = RuleEvaluator(gateway).evaluate_ntp(host, catalog.ntp_service, enforce=True)

        assert outcome.compliant is False
        assert gateway.mutating_calls == []
