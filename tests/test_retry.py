"""Polling with Wait and retrying with RetryStrategy."""

from unittest.mock import MagicMock

import pytest

from skyform_aws.apigatewayv2 import VpcLinkResource
from skyform_aws.config import WaitSettings
from skyform_aws.core import State
from skyform_aws.utils import ProvisioningError, RetryStrategy, Wait, WaitTimeoutError, with_retry


class TestWait:

    def test_true_as_soon_as_the_predicate_holds(self, sleep):
        predicate = MagicMock(side_effect=[False, False, True])

        assert Wait.at_most(60).check_every(10).until(predicate) is True
        assert predicate.call_count == 3
        assert sleep.call_count == 2
        sleep.assert_called_with(10)

    def test_false_on_timeout(self, sleep):
        predicate = MagicMock(return_value=False)

        assert Wait.at_most(30).check_every(10).until(predicate) is False
        # checked at 0, 10, 20 and 30 seconds
        assert predicate.call_count == 4
        assert sleep.call_count == 3

    def test_or_raise(self):
        with pytest.raises(WaitTimeoutError, match='never became available'):
            Wait.at_most(10).check_every(10).or_raise('never became available').until(lambda: False)

    def test_prompt_declined(self, ui):
        predicate = MagicMock(return_value=False)
        assert Wait.at_most(10).check_every(10).prompt(ui).until(predicate) is False
        assert predicate.call_count == 2

    def test_prompt_accepted_keeps_waiting(self):
        ui = MagicMock()
        ui.confirm.side_effect = [True, False]
        predicate = MagicMock(return_value=False)

        assert Wait.at_most(10).check_every(10).prompt(ui).until(predicate) is False
        assert predicate.call_count == 4
        assert ui.confirm.call_count == 2

    def test_resource_overrides(self, credentials, sleep):
        settings = WaitSettings({'api-gateway-vpc-link': {'create': {'at-most': 20, 'check-every': 5}}})
        state = State(credentials=credentials, wait_settings=settings)
        vpc_link = VpcLinkResource(name='example', subnet_ids=['subnet-1'])
        state.add(vpc_link)

        Wait.at_most(600).check_every(120).resource_overrides(vpc_link, 'create').until(lambda: False)

        assert sleep.call_count == 4
        sleep.assert_called_with(5)

    def test_overrides_only_apply_to_their_action(self, credentials, sleep):
        settings = WaitSettings({'api-gateway-vpc-link': {'delete': {'at-most': 20}}})
        state = State(credentials=credentials, wait_settings=settings)
        vpc_link = VpcLinkResource(name='example', subnet_ids=['subnet-1'])
        state.add(vpc_link)

        Wait.at_most(30).check_every(10).resource_overrides(vpc_link, 'create').until(lambda: False)

        assert sleep.call_count == 3


class TestRetryStrategy:

    def test_retries_transient_errors(self, client_error, sleep):
        func = MagicMock(side_effect=[client_error('ThrottlingException'), 'done'])
        strategy = RetryStrategy(max_retries=3, jitter=False)

        assert strategy.execute_with_retry(func) == 'done'
        sleep.assert_called_once_with(1.0)

    def test_does_not_retry_other_errors(self, client_error):
        func = MagicMock(side_effect=client_error('ValidationException'))

        with pytest.raises(Exception) as excinfo:
            RetryStrategy(max_retries=3).execute_with_retry(func)

        assert excinfo.value.response['Error']['Code'] == 'ValidationException'
        assert func.call_count == 1

    def test_exponential_delay_is_capped(self):
        strategy = RetryStrategy(base_delay=1.0, max_delay=5.0, jitter=False)
        assert [strategy.get_delay(attempt) for attempt in range(5)] == [1.0, 2.0, 4.0, 5.0, 5.0]

    def test_with_retry_decorator(self, client_error):
        calls = []

        @with_retry(max_retries=2, jitter=False)
        def describe():
            calls.append(1)
            if len(calls) < 3:
                raise client_error('ServiceUnavailable')
            return 'ok'

        assert describe() == 'ok'
        assert len(calls) == 3


class TestExecuteService:

    def test_returns_the_result(self, state):
        vpc_link = VpcLinkResource(name='example', subnet_ids=['subnet-1'])
        state.add(vpc_link)
        assert vpc_link.execute_service(lambda: 42) == 42

    def test_retries_any_client_error_then_fails(self, state, client_error, sleep):
        vpc_link = VpcLinkResource(name='example', subnet_ids=['subnet-1'])
        state.add(vpc_link)
        func = MagicMock(side_effect=client_error('ConflictException'))

        with pytest.raises(ProvisioningError, match='AWS service request failed!'):
            vpc_link.execute_service(func)

        assert func.call_count == 11
        assert all(call.args == (1.0,) for call in sleep.call_args_list)
