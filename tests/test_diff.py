"""Change planning from field metadata, and applying planned changes."""

import pytest

from skyform_aws.apigatewayv2 import ApiResource, IntegrationResource, VpcLinkResource
from skyform_aws.core import ChangeType, apply_change, plan_change, plan_delete
from skyform_aws.utils import ErrorCategory, ProviderError


def api(**kwargs):
    fields = {'name': 'example-api', 'protocol_type': 'HTTP'}
    fields.update(kwargs)
    return ApiResource(**fields)


class TestPlanChange:

    def test_create_when_nothing_exists(self):
        change = plan_change(api(), None)
        assert change.change_type == ChangeType.CREATE
        assert change.current is None

    def test_no_change(self):
        change = plan_change(api(), api(id='abc123'))
        assert change.change_type == ChangeType.NO_CHANGE
        assert change.changed_fields == set()

    def test_update_of_updatable_field(self):
        change = plan_change(api(description='new'), api(id='abc123', description='old'))
        assert change.change_type == ChangeType.UPDATE
        assert change.changed_fields == {'description'}

    def test_replace_when_a_field_is_not_updatable(self):
        change = plan_change(api(protocol_type='WEBSOCKET', description='new'), api(id='abc123'))
        assert change.change_type == ChangeType.REPLACE
        assert change.changed_fields == {'protocol_type', 'description'}
        assert 'protocol-type' in change.describe()

    def test_unconfigured_fields_are_ignored(self):
        current = api(id='abc123', description='set outside of the configuration')
        assert plan_change(api(), current).change_type == ChangeType.NO_CHANGE

    def test_outputs_are_ignored(self):
        change = plan_change(api(api_endpoint='https://a.example.com'), api(api_endpoint='https://b.example.com'))
        assert change.change_type == ChangeType.NO_CHANGE

    def test_references_compare_by_id(self):
        desired = IntegrationResource(api=api(id='abc123'), integration_type='MOCK')
        same = IntegrationResource(api=ApiResource.model_construct(id='abc123'), integration_type='MOCK')
        other = IntegrationResource(api=ApiResource.model_construct(id='def456'), integration_type='MOCK')

        assert plan_change(desired, same).change_type == ChangeType.NO_CHANGE
        assert plan_change(desired, other).change_type == ChangeType.REPLACE

    def test_empty_and_missing_collections_are_equal(self):
        current = api(id='abc123')
        current.tags = {}
        assert plan_change(api(tags={}), current).change_type == ChangeType.NO_CHANGE

    def test_delete(self):
        current = api(id='abc123')
        change = plan_delete(current)
        assert change.change_type == ChangeType.DELETE
        assert change.describe() == 'delete aws::api-gateway abc123'


class TestApplyChange:

    def test_create_adds_to_state(self, clients, state, ui):
        clients['apigatewayv2'].create_api.return_value = {'ApiId': 'abc123'}
        desired = api()

        result = apply_change(plan_change(desired, None), ui, state)

        assert result.id == 'abc123'
        assert state.find(ApiResource, 'abc123') is desired
        assert 'create aws::api-gateway' in ui.console.file.getvalue()

    def test_update_carries_outputs_from_current(self, clients, state, ui):
        current = api(id='abc123', description='old')
        state.add(current)
        desired = api(description='new')

        apply_change(plan_change(desired, current), ui, state)

        assert desired.id == 'abc123'
        assert state.resources() == [desired]
        clients['apigatewayv2'].update_api.assert_called_once_with(
            ApiId='abc123', Description='new', Name='example-api'
        )

    def test_replace_deletes_then_creates(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.create_api.return_value = {'ApiId': 'def456'}
        current = api(id='abc123')
        state.add(current)

        apply_change(plan_change(api(protocol_type='WEBSOCKET'), current), ui, state)

        client.delete_api.assert_called_once_with(ApiId='abc123')
        assert [resource.id for resource in state.resources()] == ['def456']

    def test_failures_are_wrapped(self, clients, state, ui, client_error):
        clients['apigatewayv2'].create_api.side_effect = client_error('BadRequestException', 'CreateApi')

        with pytest.raises(ProviderError) as excinfo:
            apply_change(plan_change(api(), None), ui, state)

        assert excinfo.value.category == ErrorCategory.VALIDATION
        assert excinfo.value.context.resource_type == 'aws::api-gateway'
        assert excinfo.value.context.aws_operation == 'CreateApi'
        assert excinfo.value.__cause__ is excinfo.value.cause

    def test_failed_create_leaves_nothing_in_state(self, clients, state, ui, client_error):
        clients['apigatewayv2'].create_api.side_effect = client_error('BadRequestException', 'CreateApi')
        desired = api()

        with pytest.raises(ProviderError):
            apply_change(plan_change(desired, None), ui, state)

        assert state.resources() == []

    def test_half_finished_create_stays_in_state(self, clients, state, ui, client_error):
        client = clients['apigatewayv2']
        client.create_vpc_link.return_value = {'VpcLinkId': 'vl1'}
        client.get_vpc_links.side_effect = client_error('TooManyRequestsException', 'GetVpcLinks')
        vpc_link = VpcLinkResource(name='example', subnet_ids=['subnet-1'])

        with pytest.raises(ProviderError):
            apply_change(plan_change(vpc_link, None), ui, state)

        assert state.resources() == [vpc_link]
        assert vpc_link.id == 'vl1'
