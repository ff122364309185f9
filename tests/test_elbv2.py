"""Load balancers, target groups, listeners and rules against a mocked elbv2 client."""

import pytest

from skyform_aws.elbv2 import (
    ActionResource,
    ApplicationLoadBalancerFinder,
    ApplicationLoadBalancerListenerResource,
    ApplicationLoadBalancerListenerRuleResource,
    ApplicationLoadBalancerResource,
    ConditionResource,
    HealthCheck,
    ListenerResource,
    NetworkActionResource,
    NetworkLoadBalancerListenerResource,
    NetworkLoadBalancerResource,
    RedirectAction,
    TargetGroupFinder,
    TargetGroupResource,
    TargetResource,
)
from skyform_aws.utils import ProvisioningError

LB_ARN = 'arn:aws:elasticloadbalancing:us-east-1:123456789012:loadbalancer/app/web/1'
NLB_ARN = 'arn:aws:elasticloadbalancing:us-east-1:123456789012:loadbalancer/net/tcp/5'
TG_ARN = 'arn:aws:elasticloadbalancing:us-east-1:123456789012:targetgroup/web/2'
LISTENER_ARN = 'arn:aws:elasticloadbalancing:us-east-1:123456789012:listener/app/web/1/3'
RULE_ARN = 'arn:aws:elasticloadbalancing:us-east-1:123456789012:listener-rule/app/web/1/3/4'


def bound(state, resource):
    state.add(resource)
    return resource


@pytest.fixture
def elb(clients):
    client = clients['elbv2']
    client.describe_tags.return_value = {'TagDescriptions': []}
    return client


def load_balancers(*models):
    return {'LoadBalancers': list(models)}


class TestLoadBalancer:

    def test_create_application_load_balancer(self, elb, state, ui):
        elb.create_load_balancer.return_value = load_balancers({'LoadBalancerArn': LB_ARN, 'DNSName': 'web.elb'})
        alb = bound(state, ApplicationLoadBalancerResource(
            name='web', scheme='internal', subnet_ids=['subnet-1', 'subnet-2'], tags={'Name': 'web'},
        ))

        alb.create(ui, state)

        elb.create_load_balancer.assert_called_once_with(
            Name='web', Scheme='internal', Subnets=['subnet-1', 'subnet-2'], Type='application',
        )
        elb.add_tags.assert_called_once_with(ResourceArns=[LB_ARN], Tags=[{'Key': 'Name', 'Value': 'web'}])
        assert alb.arn == LB_ARN
        assert alb.dns_name == 'web.elb'

    def test_copy_from(self, elb, state):
        elb.describe_tags.return_value = {'TagDescriptions': [{'Tags': [{'Key': 'Name', 'Value': 'web'}]}]}
        alb = bound(state, ApplicationLoadBalancerResource())

        alb.copy_from({
            'LoadBalancerArn': LB_ARN,
            'LoadBalancerName': 'web',
            'SecurityGroups': ['sg-1'],
            'AvailabilityZones': [{'SubnetId': 'subnet-1'}, {'ZoneName': 'us-east-1b'}],
        })

        assert alb.subnet_ids == ['subnet-1']
        assert alb.security_group_ids == ['sg-1']
        assert alb.tags == {'Name': 'web'}
        elb.describe_tags.assert_called_once_with(ResourceArns=[LB_ARN])

    def test_refresh_when_gone(self, elb, state, client_error):
        elb.describe_load_balancers.side_effect = client_error('LoadBalancerNotFound')
        alb = bound(state, ApplicationLoadBalancerResource(arn=LB_ARN, name='web'))

        assert alb.refresh() is False

    def test_refresh_needs_an_arn(self, state):
        alb = bound(state, ApplicationLoadBalancerResource(name='web'))

        with pytest.raises(ProvisioningError, match='the arn is missing'):
            alb.refresh()

    def test_update_subnets_and_tags(self, elb, state, ui):
        current = ApplicationLoadBalancerResource(arn=LB_ARN, name='web', tags={'keep': '1', 'drop': '2'})
        desired = bound(state, ApplicationLoadBalancerResource(
            arn=LB_ARN, name='web', subnet_ids=['subnet-3'], tags={'keep': '1', 'new': '3'},
        ))

        desired.update(ui, state, current, {'subnet_ids', 'tags'})

        elb.set_subnets.assert_called_once_with(LoadBalancerArn=LB_ARN, Subnets=['subnet-3'])
        elb.set_security_groups.assert_not_called()
        elb.add_tags.assert_called_once_with(ResourceArns=[LB_ARN], Tags=[{'Key': 'new', 'Value': '3'}])
        elb.remove_tags.assert_called_once_with(ResourceArns=[LB_ARN], TagKeys=['drop'])

    def test_network_load_balancer_waits_until_active(self, elb, state, ui, sleep):
        elb.create_load_balancer.return_value = load_balancers({'LoadBalancerArn': LB_ARN})
        elb.describe_load_balancers.side_effect = [
            load_balancers({'State': {'Code': 'provisioning'}}),
            load_balancers({'State': {'Code': 'active'}}),
        ]
        nlb = bound(state, NetworkLoadBalancerResource(name='tcp'))

        nlb.create(ui, state)

        assert elb.create_load_balancer.call_args.kwargs['Type'] == 'network'
        sleep.assert_called_once_with(30)

    def test_network_load_balancer_never_active(self, elb, state, ui):
        elb.create_load_balancer.return_value = load_balancers({'LoadBalancerArn': LB_ARN})
        elb.describe_load_balancers.return_value = load_balancers({'State': {'Code': 'failed'}})
        nlb = bound(state, NetworkLoadBalancerResource(name='tcp'))

        with pytest.raises(ProvisioningError, match="Unable to reach 'Active' state"):
            nlb.create(ui, state)

        elb.add_tags.assert_not_called()

    def test_delete_waits_until_gone(self, elb, state, ui, client_error):
        elb.describe_load_balancers.side_effect = client_error('LoadBalancerNotFound')
        alb = bound(state, ApplicationLoadBalancerResource(arn=LB_ARN, name='web'))

        alb.delete(ui, state)

        elb.delete_load_balancer.assert_called_once_with(LoadBalancerArn=LB_ARN)


class TestTargetGroup:

    def test_health_check_is_required_for_instances(self, state, ui):
        target_group = bound(state, TargetGroupResource(name='web', port=80, protocol='HTTP'))

        with pytest.raises(ProvisioningError, match='A health check must be provided'):
            target_group.create(ui, state)

    def test_create_with_health_check(self, elb, state, ui):
        elb.create_target_group.return_value = {'TargetGroups': [{'TargetGroupArn': TG_ARN}]}
        target_group = bound(state, TargetGroupResource(
            name='web', port=80, protocol='HTTP', vpc_id='vpc-1',
            health_check=HealthCheck(path='/health', matcher='200'),
        ))

        target_group.create(ui, state)

        elb.create_target_group.assert_called_once_with(
            Name='web',
            Port=80,
            Protocol='HTTP',
            TargetType='instance',
            VpcId='vpc-1',
            HealthCheckEnabled=True,
            HealthCheckPath='/health',
            Matcher={'HttpCode': '200'},
        )
        assert target_group.arn == TG_ARN
        elb.add_tags.assert_not_called()

    def test_create_lambda_target_group(self, elb, state, ui):
        elb.create_target_group.return_value = {'TargetGroups': [{'TargetGroupArn': TG_ARN}]}
        target_group = bound(state, TargetGroupResource(name='fn', target_type='lambda'))

        target_group.create(ui, state)

        elb.create_target_group.assert_called_once_with(Name='fn', TargetType='lambda', HealthCheckEnabled=False)

    def test_copy_from(self, elb, state):
        target_group = bound(state, TargetGroupResource())

        target_group.copy_from({
            'TargetGroupArn': TG_ARN,
            'TargetGroupName': 'web',
            'TargetType': 'ip',
            'HealthCheckEnabled': True,
            'HealthCheckPath': '/health',
            'Matcher': {'HttpCode': '200-299'},
        })

        assert target_group.health_check.path == '/health'
        assert target_group.health_check.matcher == '200-299'
        assert target_group.health_check.parent_resource() is target_group

    def test_refresh_when_gone(self, elb, state, client_error):
        elb.describe_target_groups.side_effect = client_error('TargetGroupNotFound')
        target_group = bound(state, TargetGroupResource(arn=TG_ARN, name='web'))

        assert target_group.refresh() is False


class TestTarget:

    def target(self, state):
        return bound(state, TargetResource(
            id='i-1', port=80, target_group=TargetGroupResource.model_construct(arn=TG_ARN),
        ))

    def test_refresh(self, elb, state):
        elb.describe_target_health.return_value = {'TargetHealthDescriptions': [
            {'Target': {'Id': 'i-1', 'Port': 8080}, 'TargetHealth': {'State': 'healthy'}},
        ]}
        target = self.target(state)

        assert target.refresh() is True
        assert target.port == 8080
        elb.describe_target_health.assert_called_once_with(
            TargetGroupArn=TG_ARN, Targets=[{'Id': 'i-1', 'Port': 80}]
        )

    def test_draining_target_is_gone(self, elb, state):
        elb.describe_target_health.return_value = {'TargetHealthDescriptions': [
            {'Target': {'Id': 'i-1', 'Port': 80}, 'TargetHealth': {'State': 'draining'}},
        ]}
        assert self.target(state).refresh() is False

    def test_invalid_target_is_gone(self, elb, state, client_error):
        elb.describe_target_health.side_effect = client_error('InvalidTarget')
        assert self.target(state).refresh() is False

    def test_register_and_deregister(self, elb, state, ui):
        target = self.target(state)

        target.create(ui, state)
        target.delete(ui, state)

        elb.register_targets.assert_called_once_with(TargetGroupArn=TG_ARN, Targets=[{'Id': 'i-1', 'Port': 80}])
        elb.deregister_targets.assert_called_once_with(TargetGroupArn=TG_ARN, Targets=[{'Id': 'i-1', 'Port': 80}])


class TestListener:

    def listener(self, state, **kwargs):
        fields = {
            'arn': LISTENER_ARN,
            'alb': ApplicationLoadBalancerResource.model_construct(arn=LB_ARN),
            'port': 443,
            'protocol': 'HTTPS',
            'default_actions': [ActionResource(type='forward',
                                               target_group=TargetGroupResource.model_construct(arn=TG_ARN))],
        }
        fields.update(kwargs)
        return bound(state, ApplicationLoadBalancerListenerResource(**fields))

    def test_create(self, elb, state, ui):
        elb.create_listener.return_value = {'Listeners': [{'ListenerArn': LISTENER_ARN}]}
        listener = self.listener(state, arn=None, default_certificate='cert-default', certificates=['cert-extra'])

        listener.create(ui, state)

        elb.create_listener.assert_called_once_with(
            Certificates=[{'CertificateArn': 'cert-default'}],
            DefaultActions=[{'Type': 'forward', 'TargetGroupArn': TG_ARN}],
            LoadBalancerArn=LB_ARN,
            Port=443,
            Protocol='HTTPS',
        )
        elb.add_listener_certificates.assert_called_once_with(
            ListenerArn=LISTENER_ARN, Certificates=[{'CertificateArn': 'cert-extra'}]
        )

    def test_update_reconciles_certificates(self, elb, state, ui):
        current = self.listener(state, certificates=['cert-a', 'cert-b'])
        desired = self.listener(state, certificates=['cert-b', 'cert-c'])

        desired.update(ui, state, current, {'certificates'})

        elb.modify_listener.assert_called_once()
        elb.add_listener_certificates.assert_called_once_with(
            ListenerArn=LISTENER_ARN, Certificates=[{'CertificateArn': 'cert-c'}]
        )
        elb.remove_listener_certificates.assert_called_once_with(
            ListenerArn=LISTENER_ARN, Certificates=[{'CertificateArn': 'cert-a'}]
        )

    def test_plain_http_clears_the_ssl_policy(self, elb, state, ui):
        listener = self.listener(state, port=80, protocol='HTTP', ssl_policy='ELBSecurityPolicy-2016-08')

        listener.update(ui, state, listener, {'port', 'protocol'})

        assert 'SslPolicy' not in elb.modify_listener.call_args.kwargs

    def test_copy_from(self, elb, state):
        elb.describe_listener_certificates.return_value = {'Certificates': [
            {'CertificateArn': 'cert-default', 'IsDefault': True},
            {'CertificateArn': 'cert-extra', 'IsDefault': False},
        ]}
        listener = bound(state, ApplicationLoadBalancerListenerResource())

        listener.copy_from({
            'ListenerArn': LISTENER_ARN,
            'LoadBalancerArn': LB_ARN,
            'Port': 443,
            'Protocol': 'HTTPS',
            'Certificates': [{'CertificateArn': 'cert-default'}],
            'DefaultActions': [{'Type': 'forward', 'TargetGroupArn': TG_ARN}],
        })

        assert listener.default_certificate == 'cert-default'
        assert listener.certificates == ['cert-extra']
        assert listener.alb.arn == LB_ARN
        assert listener.default_actions[0].target_group.arn == TG_ARN
        elb.describe_listener_certificates.assert_called_once_with(ListenerArn=LISTENER_ARN)


class TestNetworkListener:

    def listener(self, state, **kwargs):
        fields = {
            'arn': LISTENER_ARN,
            'nlb': NetworkLoadBalancerResource.model_construct(arn=NLB_ARN),
            'port': 80,
            'protocol': 'TCP',
            'default_action': NetworkActionResource(
                type='forward', target_group=TargetGroupResource.model_construct(arn=TG_ARN)),
        }
        fields.update(kwargs)
        return bound(state, NetworkLoadBalancerListenerResource(**fields))

    def test_listener_base_is_abstract(self):
        with pytest.raises(TypeError):
            ListenerResource(port=80, protocol='TCP')

    def test_create(self, elb, state, ui):
        elb.create_listener.return_value = {'Listeners': [{'ListenerArn': LISTENER_ARN}]}
        listener = self.listener(state, arn=None)

        listener.create(ui, state)

        elb.create_listener.assert_called_once_with(
            DefaultActions=[{'Type': 'forward', 'TargetGroupArn': TG_ARN}],
            LoadBalancerArn=NLB_ARN,
            Port=80,
            Protocol='TCP',
        )
        assert listener.arn == LISTENER_ARN

    def test_tcp_update_clears_the_ssl_policy(self, elb, state, ui):
        listener = self.listener(state, ssl_policy='ELBSecurityPolicy-2016-08')

        listener.update(ui, state, listener, {'protocol'})

        elb.modify_listener.assert_called_once_with(
            DefaultActions=[{'Type': 'forward', 'TargetGroupArn': TG_ARN}],
            ListenerArn=LISTENER_ARN,
            Port=80,
            Protocol='TCP',
        )

    def test_tls_update_keeps_the_ssl_policy(self, elb, state, ui):
        listener = self.listener(state, protocol='TLS', default_certificate='cert-default',
                                 ssl_policy='ELBSecurityPolicy-2016-08')

        listener.update(ui, state, listener, {'protocol'})

        assert elb.modify_listener.call_args.kwargs['SslPolicy'] == 'ELBSecurityPolicy-2016-08'
        assert elb.modify_listener.call_args.kwargs['Certificates'] == [{'CertificateArn': 'cert-default'}]

    def test_copy_from(self, state):
        target_group = bound(state, TargetGroupResource(arn=TG_ARN, name='web'))
        listener = bound(state, NetworkLoadBalancerListenerResource())
        model = {
            'ListenerArn': LISTENER_ARN,
            'LoadBalancerArn': NLB_ARN,
            'Port': 80,
            'Protocol': 'TCP',
            'DefaultActions': [{'Type': 'forward', 'TargetGroupArn': TG_ARN}],
        }

        listener.copy_from(model)

        assert listener.nlb.arn == NLB_ARN
        assert listener.default_action.target_group is target_group
        assert listener.default_action.parent_resource() is listener
        assert listener.default_actions_request() == model['DefaultActions']

    def test_refresh_when_gone(self, elb, state, client_error):
        elb.describe_listeners.side_effect = client_error('ListenerNotFound')
        assert self.listener(state).refresh() is False


class TestListenerRule:

    def rule(self, state, **kwargs):
        fields = {
            'arn': RULE_ARN,
            'alb_listener': ApplicationLoadBalancerListenerResource.model_construct(arn=LISTENER_ARN),
            'priority': 10,
            'actions': [ActionResource(type='forward', target_group=TargetGroupResource.model_construct(arn=TG_ARN))],
            'conditions': [ConditionResource(field='path-pattern', values=['/api/*'])],
        }
        fields.update(kwargs)
        return bound(state, ApplicationLoadBalancerListenerRuleResource(**fields))

    def test_create(self, elb, state, ui):
        elb.create_rule.return_value = {'Rules': [{'RuleArn': RULE_ARN}]}
        rule = self.rule(state, arn=None)

        rule.create(ui, state)

        elb.create_rule.assert_called_once_with(
            Actions=[{'Type': 'forward', 'TargetGroupArn': TG_ARN}],
            Conditions=[{'Field': 'path-pattern', 'Values': ['/api/*']}],
            ListenerArn=LISTENER_ARN,
            Priority=10,
        )
        assert rule.arn == RULE_ARN

    @pytest.mark.parametrize('priority, expected', [('default', -1), ('10', 10), (None, None)])
    def test_priority(self, state, priority, expected):
        rule = self.rule(state)
        rule.copy_from({'RuleArn': RULE_ARN, 'Priority': priority})
        assert rule.priority == expected

    def test_priority_change_only(self, elb, state, ui):
        rule = self.rule(state, priority=20)

        rule.update(ui, state, self.rule(state), {'priority'})

        elb.modify_rule.assert_not_called()
        elb.set_rule_priorities.assert_called_once_with(RulePriorities=[{'RuleArn': RULE_ARN, 'Priority': 20}])

    def test_condition_change(self, elb, state, ui):
        rule = self.rule(state, conditions=[ConditionResource(field='host-header', host_header_values=['a.example.com'])])

        rule.update(ui, state, self.rule(state), {'conditions'})

        elb.modify_rule.assert_called_once_with(
            RuleArn=RULE_ARN,
            Actions=[{'Type': 'forward', 'TargetGroupArn': TG_ARN}],
            Conditions=[{'Field': 'host-header', 'HostHeaderConfig': {'Values': ['a.example.com']}}],
        )
        elb.set_rule_priorities.assert_not_called()

    def test_refresh_keeps_the_legacy_condition_form(self, elb, state):
        elb.describe_rules.return_value = {'Rules': [{
            'RuleArn': RULE_ARN,
            'Priority': '10',
            'Conditions': [{
                'Field': 'path-pattern',
                'Values': ['/api/*'],
                'PathPatternConfig': {'Values': ['/api/*']},
            }],
        }]}
        rule = self.rule(state)

        assert rule.refresh() is True
        assert rule.conditions[0].values == ['/api/*']
        assert rule.conditions[0].path_pattern_values == []

    def test_refresh_keeps_the_typed_condition_form(self, elb, state):
        elb.describe_rules.return_value = {'Rules': [{
            'RuleArn': RULE_ARN,
            'Priority': '10',
            'Conditions': [{'Field': 'path-pattern', 'PathPatternConfig': {'Values': ['/api/*']}}],
        }]}
        rule = self.rule(state, conditions=[ConditionResource(field='path-pattern', path_pattern_values=['/api/*'])])

        assert rule.refresh() is True
        assert rule.conditions[0].values == []
        assert rule.conditions[0].path_pattern_values == ['/api/*']

    def test_refresh_when_gone(self, elb, state, client_error):
        elb.describe_rules.side_effect = client_error('RuleNotFound')
        assert self.rule(state).refresh() is False


class TestActions:

    def test_type_is_derived_from_the_block(self):
        action = ActionResource(redirect_action=RedirectAction(protocol='HTTPS', status_code='HTTP_301'))
        assert action.to_action() == {
            'Type': 'redirect',
            'RedirectConfig': {'Protocol': 'HTTPS', 'StatusCode': 'HTTP_301'},
        }

    def test_copy_from_forward_config(self, state):
        action = ActionResource().bind(state=state)

        action.copy_from({
            'Type': 'forward',
            'Order': 1,
            'ForwardConfig': {
                'TargetGroups': [{'TargetGroupArn': TG_ARN, 'Weight': 5}],
                'TargetGroupStickinessConfig': {'Enabled': True, 'DurationSeconds': 60},
            },
        })

        assert action.order == 1
        assert action.forward_action.target_group_weights[0].target_group.arn == TG_ARN
        assert action.forward_action.target_group_weights[0].weight == 5
        assert action.forward_action.target_group_stickiness.duration == 60


class TestFinders:

    def test_load_balancers_of_the_finder_type_only(self, elb, state):
        elb.describe_load_balancers.return_value = load_balancers(
            {'LoadBalancerArn': LB_ARN, 'LoadBalancerName': 'web', 'Type': 'application'},
            {'LoadBalancerArn': 'other', 'LoadBalancerName': 'web', 'Type': 'network'},
        )

        found = ApplicationLoadBalancerFinder(state=state, name='web').find()

        assert [alb.arn for alb in found] == [LB_ARN]
        assert isinstance(found[0], ApplicationLoadBalancerResource)
        elb.describe_load_balancers.assert_called_once_with(Names=['web'])

    def test_unknown_load_balancer(self, elb, state, client_error):
        elb.describe_load_balancers.side_effect = client_error('LoadBalancerNotFound')
        assert ApplicationLoadBalancerFinder(state=state, name='missing').find() == []

    def test_target_groups_follow_markers(self, elb, state):
        elb.describe_target_groups.side_effect = [
            {'TargetGroups': [{'TargetGroupArn': 'tg-1'}], 'NextMarker': 'm1'},
            {'TargetGroups': [{'TargetGroupArn': 'tg-2'}]},
        ]

        found = TargetGroupFinder(state=state).find()

        assert [target_group.arn for target_group in found] == ['tg-1', 'tg-2']
        elb.describe_target_groups.assert_called_with(Marker='m1')
