"""API Gateway v2 resources and finders against a mocked apigatewayv2 client."""

import pytest
from botocore.exceptions import ClientError

from skyform_aws.apigatewayv2 import (
    ApiCors,
    ApiFinder,
    ApiJwtConfiguration,
    ApiMappingFinder,
    ApiMappingResource,
    ApiResource,
    AuthorizerResource,
    DeploymentResource,
    DomainNameResource,
    IntegrationResource,
    IntegrationResponseFinder,
    IntegrationResponseResource,
    ModelResource,
    RouteResource,
    RouteResponseFinder,
    RouteResponseResource,
    StageResource,
    VpcLinkResource,
)


def bound(state, resource):
    state.add(resource)
    return resource


def items(*models):
    return {'Items': list(models)}


class TestApi:

    def test_copy_from(self, state):
        api = bound(state, ApiResource())
        api.copy_from({
            'ApiId': 'abc123',
            'Name': 'example-api',
            'ProtocolType': 'HTTP',
            'ApiEndpoint': 'https://abc123.execute-api.us-east-1.amazonaws.com',
            'CorsConfiguration': {'AllowOrigins': ['https://example.com'], 'MaxAge': 300},
            'Tags': {'team': 'search'},
        })

        assert api.id == 'abc123'
        assert api.arn == 'arn:aws:apigateway:us-east-1::/apis/abc123'
        assert api.cors_configuration.allow_origins == ['https://example.com']
        assert api.cors_configuration.max_age == 300
        assert api.cors_configuration.parent_resource() is api
        assert api.tags == {'team': 'search'}

    def test_create(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.create_api.return_value = {'ApiId': 'abc123', 'ApiEndpoint': 'https://abc123.example.com'}
        api = bound(state, ApiResource(
            name='example-api',
            protocol_type='HTTP',
            cors_configuration=ApiCors(allow_origins=['*']),
        ))

        api.create(ui, state)

        client.create_api.assert_called_once_with(
            CorsConfiguration={'AllowOrigins': ['*']},
            Name='example-api',
            ProtocolType='HTTP',
        )
        assert api.id == 'abc123'
        assert api.api_endpoint == 'https://abc123.example.com'

    def test_refresh(self, clients, state):
        clients['apigatewayv2'].get_apis.return_value = items(
            {'ApiId': 'other', 'Name': 'other-api'},
            {'ApiId': 'abc123', 'Name': 'renamed-api', 'ProtocolType': 'HTTP'},
        )
        api = bound(state, ApiResource(id='abc123', name='example-api'))

        assert api.refresh() is True
        assert api.name == 'renamed-api'

    def test_refresh_follows_pages(self, clients, state):
        clients['apigatewayv2'].get_apis.side_effect = [
            {'Items': [{'ApiId': 'other'}], 'NextToken': 'page-2'},
            items({'ApiId': 'abc123', 'Name': 'example-api'}),
        ]
        api = bound(state, ApiResource(id='abc123'))

        assert api.refresh() is True
        clients['apigatewayv2'].get_apis.assert_called_with(NextToken='page-2')

    def test_refresh_when_gone(self, clients, state):
        clients['apigatewayv2'].get_apis.return_value = items()
        api = bound(state, ApiResource(id='abc123', name='example-api'))

        assert api.refresh() is False

    def test_update_removes_cors_and_replaces_tags(self, clients, state, ui):
        client = clients['apigatewayv2']
        current = ApiResource(id='abc123', name='example-api', cors_configuration=ApiCors(max_age=10),
                              tags={'old': '1'})
        desired = bound(state, ApiResource(id='abc123', name='example-api', tags={'new': '2'}))
        desired.arn = desired.arn_format()

        desired.update(ui, state, current, {'cors_configuration', 'tags'})

        client.delete_cors_configuration.assert_called_once_with(ApiId='abc123')
        client.untag_resource.assert_called_once_with(ResourceArn=desired.arn, TagKeys=['old'])
        client.tag_resource.assert_called_once_with(ResourceArn=desired.arn, Tags={'new': '2'})


class TestStage:

    def test_refresh(self, clients, state):
        clients['apigatewayv2'].get_stages.return_value = items({
            'StageName': 'prod',
            'AutoDeploy': True,
            'DeploymentId': 'dep1',
            'DefaultRouteSettings': {'LoggingLevel': 'INFO'},
            'RouteSettings': {'GET /items': {'ThrottlingBurstLimit': 10}},
            'StageVariables': {'stage': 'prod'},
        })
        api = bound(state, ApiResource(id='abc123', name='example-api'))
        stage = bound(state, StageResource(name='prod', api=api))

        assert stage.refresh() is True
        clients['apigatewayv2'].get_stages.assert_called_with(ApiId='abc123')
        assert stage.api is api
        assert stage.auto_deploy is True
        assert stage.deployment.id == 'dep1'
        assert stage.default_route_settings.logging_level == 'INFO'
        assert stage.route_settings[0].key == 'GET /items'
        assert stage.route_settings[0].throttling_burst_limit == 10
        assert stage.arn == 'arn:aws:apigateway:us-east-1::/apis/abc123/stages/prod'

    def test_copy_from_locates_the_api(self, clients, state, client_error):
        client = clients['apigatewayv2']
        client.get_apis.return_value = items({'ApiId': 'gone'}, {'ApiId': 'abc123'})
        client.get_stages.side_effect = [
            client_error('NotFoundException', 'GetStages'),
            items({'StageName': 'prod'}),
        ]
        stage = bound(state, StageResource())

        stage.copy_from({'StageName': 'prod'})

        assert stage.api.id == 'abc123'
        assert stage.arn == 'arn:aws:apigateway:us-east-1::/apis/abc123/stages/prod'

    def test_create(self, clients, state, ui):
        stage = bound(state, StageResource(
            name='prod',
            api=ApiResource.model_construct(id='abc123'),
            auto_deploy=True,
        ))

        stage.create(ui, state)

        clients['apigatewayv2'].create_stage.assert_called_once_with(
            ApiId='abc123', StageName='prod', AutoDeploy=True, Tags={},
        )


class TestRoute:

    def test_create_sends_request_parameters(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.create_route.return_value = {'RouteId': 'r1'}
        route = bound(state, RouteResource(
            api=ApiResource.model_construct(id='abc123'),
            route_key='GET /items',
            request_parameters={'route.request.querystring.id': True},
        ))

        route.create(ui, state)

        client.create_route.assert_called_once_with(
            ApiId='abc123',
            RequestParameters={'route.request.querystring.id': {'Required': True}},
            RouteKey='GET /items',
        )
        assert route.id == 'r1'

    def test_copy_from(self, state):
        route = bound(state, RouteResource(api=ApiResource.model_construct(id='abc123')))

        route.copy_from({
            'RouteId': 'r1',
            'RouteKey': 'GET /items',
            'AuthorizationType': 'NONE',
            'RequestParameters': {'route.request.header.x-id': {'Required': False}},
        })

        assert route.id == 'r1'
        assert route.request_parameters == {'route.request.header.x-id': False}
        assert route.authorizer is None

    def test_update(self, clients, state, ui):
        route = bound(state, RouteResource(
            id='r1',
            api=ApiResource.model_construct(id='abc123'),
            route_key='GET /items',
            target='integrations/i1',
        ))

        route.update(ui, state, route, {'target'})

        clients['apigatewayv2'].update_route.assert_called_once_with(
            RouteId='r1', ApiId='abc123', RouteKey='GET /items', Target='integrations/i1',
        )


class TestVpcLink:

    def test_create_waits_until_available(self, clients, state, ui, sleep):
        client = clients['apigatewayv2']
        client.create_vpc_link.return_value = {'VpcLinkId': 'vl1'}
        client.get_vpc_links.side_effect = [
            items({'VpcLinkId': 'vl1', 'VpcLinkStatus': 'PENDING'}),
            items({'VpcLinkId': 'vl1', 'VpcLinkStatus': 'AVAILABLE'}),
        ]
        vpc_link = bound(state, VpcLinkResource(name='example', subnet_ids=['subnet-1', 'subnet-2']))

        vpc_link.create(ui, state)

        client.create_vpc_link.assert_called_once_with(Name='example', SubnetIds=['subnet-1', 'subnet-2'])
        assert vpc_link.status == 'AVAILABLE'
        assert vpc_link.arn == 'arn:aws:apigateway:us-east-1::/vpclinks/vl1'
        sleep.assert_called_once_with(120)

    def test_update_renames(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.get_vpc_links.return_value = items({'VpcLinkId': 'vl1', 'VpcLinkStatus': 'AVAILABLE'})
        vpc_link = bound(state, VpcLinkResource(id='vl1', name='renamed', subnet_ids=['subnet-1']))

        vpc_link.update(ui, state, vpc_link, {'name'})

        client.update_vpc_link.assert_called_once_with(VpcLinkId='vl1', Name='renamed')
        client.tag_resource.assert_not_called()


class TestDomainName:

    def test_create(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.create_domain_name.return_value = {
            'DomainName': 'api.example.com',
            'DomainNameConfigurations': [{
                'CertificateArn': 'arn:aws:acm:us-east-1:123456789012:certificate/abc',
                'EndpointType': 'REGIONAL',
            }],
        }
        domain = bound(state, DomainNameResource(name='api.example.com'))

        domain.create(ui, state)

        client.create_domain_name.assert_called_once_with(DomainName='api.example.com', Tags={})
        assert domain.arn == 'arn:aws:apigateway:us-east-1::/domainnames/api.example.com'
        assert domain.domain_name_configurations[0].endpoint_type == 'REGIONAL'

    def test_refresh_when_gone(self, clients, state):
        clients['apigatewayv2'].get_domain_names.return_value = items({'DomainName': 'other.example.com'})
        domain = bound(state, DomainNameResource(name='api.example.com'))

        assert domain.refresh() is False


class TestAuthorizer:

    def authorizer(self, state, **kwargs):
        fields = {
            'api': ApiResource.model_construct(id='abc123'),
            'name': 'jwt',
            'authorizer_type': 'JWT',
            'identity_sources': ['$request.header.Authorization'],
            'jwt_configuration': ApiJwtConfiguration(audience=['example-audience'], issuer='https://issuer.example.com'),
        }
        fields.update(kwargs)
        return bound(state, AuthorizerResource(**fields))

    def test_create(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.create_authorizer.return_value = {'AuthorizerId': 'au1'}
        authorizer = self.authorizer(state)

        authorizer.create(ui, state)

        client.create_authorizer.assert_called_once_with(
            ApiId='abc123',
            AuthorizerType='JWT',
            IdentitySource=['$request.header.Authorization'],
            JwtConfiguration={'Audience': ['example-audience'], 'Issuer': 'https://issuer.example.com'},
            Name='jwt',
        )
        assert authorizer.id == 'au1'

    def test_copy_from_feeds_the_update_request(self, clients, state, ui):
        authorizer = bound(state, AuthorizerResource(api=ApiResource.model_construct(id='abc123')))
        authorizer.copy_from({
            'AuthorizerId': 'au1',
            'AuthorizerType': 'REQUEST',
            'AuthorizerUri': 'arn:aws:apigateway:us-east-1:lambda:path/functions/auth/invocations',
            'AuthorizerPayloadFormatVersion': '2.0',
            'EnableSimpleResponses': True,
            'IdentitySource': ['$request.header.Authorization'],
            'Name': 'lambda-auth',
        })

        authorizer.update(ui, state, authorizer, {'name'})

        clients['apigatewayv2'].update_authorizer.assert_called_once_with(
            AuthorizerId='au1',
            ApiId='abc123',
            AuthorizerPayloadFormatVersion='2.0',
            AuthorizerType='REQUEST',
            AuthorizerUri='arn:aws:apigateway:us-east-1:lambda:path/functions/auth/invocations',
            EnableSimpleResponses=True,
            IdentitySource=['$request.header.Authorization'],
            Name='lambda-auth',
        )
        assert authorizer.jwt_configuration is None

    def test_refresh_when_gone(self, clients, state):
        clients['apigatewayv2'].get_authorizers.return_value = items({'AuthorizerId': 'other'})
        assert self.authorizer(state, id='au1').refresh() is False
        clients['apigatewayv2'].get_authorizers.assert_called_with(ApiId='abc123')


class TestModel:

    def test_schema_alias(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.create_model.return_value = {'ModelId': 'm1'}
        model = bound(state, ModelResource(**{
            'api': ApiResource.model_construct(id='abc123'),
            'name': 'example',
            'content-type': 'application/json',
            'schema': '{"type": "object"}',
        }))

        model.create(ui, state)

        assert model.schema_definition == '{"type": "object"}'
        client.create_model.assert_called_once_with(
            ApiId='abc123', ContentType='application/json', Name='example', Schema='{"type": "object"}',
        )
        assert model.id == 'm1'

    def test_copy_from_locates_the_api(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.get_apis.return_value = items({'ApiId': 'abc123'})
        client.get_models.return_value = items({'ModelId': 'm1'})
        model = bound(state, ModelResource())

        model.copy_from({
            'ModelId': 'm1', 'Name': 'example', 'ContentType': 'application/json', 'Schema': '{}',
        })
        model.update(ui, state, model, {'schema_definition'})

        assert model.api.id == 'abc123'
        client.update_model.assert_called_once_with(
            ModelId='m1', ApiId='abc123', ContentType='application/json', Name='example', Schema='{}',
        )

    def test_refresh_when_gone(self, clients, state):
        clients['apigatewayv2'].get_models.return_value = items()
        model = bound(state, ModelResource(id='m1', api=ApiResource.model_construct(id='abc123')))
        assert model.refresh() is False


class TestDeployment:

    def test_create(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.create_deployment.return_value = {'DeploymentId': 'dep1', 'DeploymentStatus': 'PENDING'}
        deployment = bound(state, DeploymentResource(
            api=ApiResource.model_construct(id='abc123'), description='first',
        ))

        deployment.create(ui, state)

        client.create_deployment.assert_called_once_with(ApiId='abc123', Description='first')
        assert deployment.id == 'dep1'
        assert deployment.status == 'PENDING'

    def test_refresh(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.get_deployments.return_value = items(
            {'DeploymentId': 'dep1', 'DeploymentStatus': 'DEPLOYED', 'Description': 'first'},
        )
        deployment = bound(state, DeploymentResource(id='dep1', api=ApiResource.model_construct(id='abc123')))

        assert deployment.refresh() is True
        deployment.update(ui, state, deployment, {'description'})

        assert deployment.status == 'DEPLOYED'
        client.update_deployment.assert_called_once_with(ApiId='abc123', DeploymentId='dep1', Description='first')

    def test_refresh_when_gone(self, clients, state):
        clients['apigatewayv2'].get_deployments.return_value = items()
        deployment = bound(state, DeploymentResource(id='dep1', api=ApiResource.model_construct(id='abc123')))
        assert deployment.refresh() is False


class TestIntegrationResponse:

    def test_copy_from_locates_parents(self, clients, state, ui, client_error):
        client = clients['apigatewayv2']
        client.get_apis.return_value = items({'ApiId': 'gone'}, {'ApiId': 'abc123'})
        client.get_integrations.side_effect = [
            client_error('NotFoundException', 'GetIntegrations'),
            items({'IntegrationId': 'i1'}),
        ]
        client.get_integration_responses.return_value = items({'IntegrationResponseId': 'ir1'})
        response = bound(state, IntegrationResponseResource())

        response.copy_from({
            'IntegrationResponseId': 'ir1',
            'IntegrationResponseKey': '/400/',
            'ResponseTemplates': {'application/json': '{"error": true}'},
        })
        response.update(ui, state, response, {'response_templates'})

        assert response.api.id == 'abc123'
        assert response.integration.id == 'i1'
        client.get_integration_responses.assert_called_with(ApiId='abc123', IntegrationId='i1')
        client.update_integration_response.assert_called_once_with(
            IntegrationResponseId='ir1',
            ApiId='abc123',
            IntegrationId='i1',
            IntegrationResponseKey='/400/',
            ResponseTemplates={'application/json': '{"error": true}'},
        )

    def test_other_errors_stop_the_scan(self, clients, state, client_error):
        client = clients['apigatewayv2']
        client.get_apis.return_value = items({'ApiId': 'abc123'})
        client.get_integrations.side_effect = client_error('BadRequestException', 'GetIntegrations')
        response = bound(state, IntegrationResponseResource())

        with pytest.raises(ClientError):
            response.copy_from({'IntegrationResponseId': 'ir1'})

    def test_refresh_when_gone(self, clients, state):
        clients['apigatewayv2'].get_integration_responses.return_value = items()
        response = bound(state, IntegrationResponseResource(
            id='ir1',
            api=ApiResource.model_construct(id='abc123'),
            integration=IntegrationResource.model_construct(id='i1'),
        ))
        assert response.refresh() is False


class TestRouteResponse:

    def route_response(self, state, **kwargs):
        fields = {
            'api': ApiResource.model_construct(id='abc123'),
            'route': RouteResource.model_construct(id='r1'),
            'route_response_key': '$default',
        }
        fields.update(kwargs)
        return bound(state, RouteResponseResource(**fields))

    def test_create(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.create_route_response.return_value = {'RouteResponseId': 'rr1'}
        route_response = self.route_response(state, response_parameters={'route.response.header.x-id': True})

        route_response.create(ui, state)

        client.create_route_response.assert_called_once_with(
            ApiId='abc123',
            RouteId='r1',
            ResponseParameters={'route.response.header.x-id': {'Required': True}},
            RouteResponseKey='$default',
        )
        assert route_response.id == 'rr1'

    def test_copy_from_feeds_the_update_request(self, clients, state, ui):
        route_response = self.route_response(state)
        route_response.copy_from({
            'RouteResponseId': 'rr1',
            'RouteResponseKey': '$default',
            'ModelSelectionExpression': '$request.body.action',
            'ResponseModels': {'$default': 'example'},
            'ResponseParameters': {'route.response.header.x-id': {'Required': False}},
        })

        route_response.update(ui, state, route_response, {'response_models'})

        clients['apigatewayv2'].update_route_response.assert_called_once_with(
            RouteResponseId='rr1',
            ApiId='abc123',
            RouteId='r1',
            ModelSelectionExpression='$request.body.action',
            ResponseModels={'$default': 'example'},
            ResponseParameters={'route.response.header.x-id': {'Required': False}},
            RouteResponseKey='$default',
        )

    def test_refresh_when_gone(self, clients, state):
        clients['apigatewayv2'].get_route_responses.return_value = items({'RouteResponseId': 'other'})
        assert self.route_response(state, id='rr1').refresh() is False
        clients['apigatewayv2'].get_route_responses.assert_called_with(ApiId='abc123', RouteId='r1')


class TestApiMapping:

    def mapping(self, state, **kwargs):
        fields = {'domain_name': DomainNameResource.model_construct(name='api.example.com')}
        fields.update(kwargs)
        return bound(state, ApiMappingResource(**fields))

    def test_copy_from_picks_the_stage_of_the_mapped_api(self, state):
        bound(state, StageResource(name='prod', api=ApiResource.model_construct(id='aaa')))
        stage = bound(state, StageResource(name='prod', api=ApiResource.model_construct(id='bbb')))
        mapping = self.mapping(state)

        mapping.copy_from({'ApiMappingId': 'm1', 'ApiId': 'bbb', 'Stage': 'prod', 'ApiMappingKey': 'v1'})

        assert mapping.stage is stage
        assert mapping.api.id == 'bbb'

    def test_copy_from_with_an_untracked_stage(self, state):
        bound(state, StageResource(name='prod', api=ApiResource.model_construct(id='aaa')))
        mapping = self.mapping(state)

        mapping.copy_from({'ApiMappingId': 'm1', 'ApiId': 'bbb', 'Stage': 'prod'})

        assert mapping.stage.name == 'prod'
        assert mapping.stage.api is mapping.api

    def test_copy_from_feeds_the_update_request(self, clients, state, ui):
        mapping = self.mapping(state)
        mapping.copy_from({'ApiMappingId': 'm1', 'ApiId': 'bbb', 'Stage': 'prod', 'ApiMappingKey': 'v1'})

        mapping.update(ui, state, mapping, {'api_mapping_key'})

        clients['apigatewayv2'].update_api_mapping.assert_called_once_with(
            ApiMappingId='m1', ApiId='bbb', ApiMappingKey='v1', DomainName='api.example.com', Stage='prod',
        )

    def test_create(self, clients, state, ui):
        client = clients['apigatewayv2']
        client.create_api_mapping.return_value = {'ApiMappingId': 'm1'}
        api = ApiResource.model_construct(id='abc123')
        mapping = self.mapping(state, api=api, stage=StageResource.model_construct(name='prod', api=api))

        mapping.create(ui, state)

        client.create_api_mapping.assert_called_once_with(
            ApiId='abc123', DomainName='api.example.com', Stage='prod',
        )
        assert mapping.id == 'm1'

    def test_refresh_when_gone(self, clients, state):
        clients['apigatewayv2'].get_api_mappings.return_value = items()
        assert self.mapping(state, id='m1').refresh() is False
        clients['apigatewayv2'].get_api_mappings.assert_called_with(DomainName='api.example.com')


class TestFinders:

    def test_api_finder_by_name(self, clients, state):
        clients['apigatewayv2'].get_apis.return_value = items(
            {'ApiId': 'a1', 'Name': 'first'},
            {'ApiId': 'a2', 'Name': 'second'},
        )

        apis = ApiFinder(state=state, name='second').find()

        assert [api.id for api in apis] == ['a2']
        assert apis[0].state() is state

    def test_api_finder_without_filters(self, clients, state):
        clients['apigatewayv2'].get_apis.return_value = items({'ApiId': 'a1'}, {'ApiId': 'a2'})
        assert len(ApiFinder(state=state).find()) == 2

    def test_api_mapping_finder_links_parents(self, clients, state):
        client = clients['apigatewayv2']
        client.get_domain_names.return_value = items({'DomainName': 'api.example.com'})
        client.get_api_mappings.return_value = items(
            {'ApiMappingId': 'm1', 'ApiId': 'a1', 'Stage': 'prod', 'ApiMappingKey': 'v1'},
        )

        mappings = ApiMappingFinder(state=state, domain_name='api.example.com').find()

        assert len(mappings) == 1
        mapping = mappings[0]
        assert mapping.api.id == 'a1'
        assert mapping.domain_name.name == 'api.example.com'
        assert mapping.stage.name == 'prod'
        assert mapping.stage.api is mapping.api
        client.get_api_mappings.assert_any_call(DomainName='api.example.com')

    def test_integration_response_finder_skips_vanished_apis(self, clients, state, client_error):
        client = clients['apigatewayv2']
        client.get_apis.return_value = items({'ApiId': 'gone'}, {'ApiId': 'abc123'})
        client.get_integrations.side_effect = [
            client_error('NotFoundException', 'GetIntegrations'),
            items({'IntegrationId': 'i1'}),
        ]
        client.get_integration_responses.return_value = items(
            {'IntegrationResponseId': 'ir1', 'IntegrationResponseKey': '/400/'},
            {'IntegrationResponseId': 'ir2', 'IntegrationResponseKey': '$default'},
        )

        found = IntegrationResponseFinder(state=state, id='ir2').find()

        assert len(found) == 1
        assert found[0].id == 'ir2'
        assert found[0].api.id == 'abc123'
        assert found[0].integration.id == 'i1'
        client.get_integration_responses.assert_called_once_with(ApiId='abc123', IntegrationId='i1')

    def test_integration_response_finder_propagates_other_errors(self, clients, state, client_error):
        client = clients['apigatewayv2']
        client.get_apis.return_value = items({'ApiId': 'abc123'})
        client.get_integrations.side_effect = client_error('BadRequestException', 'GetIntegrations')

        with pytest.raises(ClientError):
            IntegrationResponseFinder(state=state, id='ir1').find()

    def test_route_response_finder(self, clients, state):
        client = clients['apigatewayv2']
        client.get_route_responses.return_value = items(
            {'RouteResponseId': 'rr1', 'RouteResponseKey': '$default'},
        )

        found = RouteResponseFinder(state=state, api_id='abc123', route_id='r1').find()

        assert [response.id for response in found] == ['rr1']
        assert found[0].api.id == 'abc123'
        assert found[0].route.id == 'r1'
        client.get_route_responses.assert_called_once_with(ApiId='abc123', RouteId='r1')
        client.get_apis.assert_not_called()
