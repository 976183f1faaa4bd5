"""AWS CloudFormation template generation (ECS on Fargate)."""

import math
import re
from typing import Any, Dict, List

from ..utils.exceptions import ManifestError
from ..utils.helpers import dumps
from .services import DeploymentConfig, ServiceDefinition
from .writer import Manifest

CLOUDFORMATION_FILENAME = 'cloudformation.json'

# Fargate CPU units -> smallest memory (MiB) allowed with them
FARGATE_CPU_MEMORY = {
    256: 512,
    512: 1024,
    1024: 2048,
    2048: 4096,
    4096: 8192,
}


def logical_id(name: str) -> str:
    """'api-gateway' -> 'ApiGateway'."""
    return ''.join(part.capitalize() for part in re.split(r'[^A-Za-z0-9]+', name) if part)


def parse_cpu_units(cpu: str) -> int:
    """Kubernetes CPU quantity to the smallest Fargate CPU size that covers it."""
    text = str(cpu).strip()
    try:
        millicores = float(text[:-1]) if text.endswith('m') else float(text) * 1000
    except ValueError:
        raise ManifestError(f"Invalid CPU quantity '{cpu}'")

    units = math.ceil(millicores * 1024 / 1000)
    for size in sorted(FARGATE_CPU_MEMORY):
        if units <= size:
            return size
    raise ManifestError(f"CPU quantity '{cpu}' exceeds the largest Fargate size")


def parse_memory_mib(memory: str) -> int:
    """Kubernetes memory quantity (Mi/Gi/M/G) to MiB."""
    match = re.fullmatch(r'\s*(\d+(?:\.\d+)?)\s*(Mi|Gi|M|G)?\s*', str(memory))
    if not match:
        raise ManifestError(f"Invalid memory quantity '{memory}'")
    value, unit = float(match.group(1)), match.group(2) or 'Mi'
    factor = {'Mi': 1, 'M': 1, 'Gi': 1024, 'G': 1024}[unit]
    return math.ceil(value * factor)


def _task_definition(deploy: DeploymentConfig, service: ServiceDefinition) -> Dict[str, Any]:
    cpu = parse_cpu_units(service.cpu)
    memory = max(parse_memory_mib(service.memory), FARGATE_CPU_MEMORY[cpu])
    sid = logical_id(service.name)

    environment = [{'Name': 'ENVIRONMENT', 'Value': deploy.environment}]
    environment += [{'Name': k, 'Value': v} for k, v in service.environment.items()]
    environment += [{'Name': k, 'Value': {'Ref': f'{sid}{logical_id(k)}'}} for k in service.secrets]

    container: Dict[str, Any] = {
        'Name': service.name,
        'Image': deploy.image_for(service),
        'Essential': True,
        'PortMappings': [{'ContainerPort': service.port, 'Protocol': 'tcp'}],
        'Environment': environment,
        'LogConfiguration': {
            'LogDriver': 'awslogs',
            'Options': {
                'awslogs-group': {'Ref': 'LogGroup'},
                'awslogs-region': {'Ref': 'AWS::Region'},
                'awslogs-stream-prefix': service.name,
            },
        },
    }
    if service.command:
        container['Command'] = ['/bin/sh', '-c', service.command]

    return {
        'Type': 'AWS::ECS::TaskDefinition',
        'Properties': {
            'Family': f'{deploy.project_name}-{service.name}',
            'Cpu': str(cpu),
            'Memory': str(memory),
            'NetworkMode': 'awsvpc',
            'RequiresCompatibilities': ['FARGATE'],
            'ExecutionRoleArn': {'Fn::GetAtt': ['ExecutionRole', 'Arn']},
            'ContainerDefinitions': [container],
        },
    }


def _ecs_service(service: ServiceDefinition) -> Dict[str, Any]:
    sid = logical_id(service.name)
    return {
        'Type': 'AWS::ECS::Service',
        'Properties': {
            'ServiceName': service.name,
            'Cluster': {'Ref': 'Cluster'},
            'LaunchType': 'FARGATE',
            'DesiredCount': service.replicas,
            'TaskDefinition': {'Ref': f'{sid}TaskDefinition'},
            'NetworkConfiguration': {
                'AwsvpcConfiguration': {
                    'AssignPublicIp': 'DISABLED',
                    'Subnets': {'Ref': 'SubnetIds'},
                    'SecurityGroups': [{'Ref': 'ServiceSecurityGroup'}],
                },
            },
        },
    }


def cloudformation_template(deploy: DeploymentConfig) -> Dict[str, Any]:
    parameters: Dict[str, Any] = {
        'VpcId': {'Type': 'AWS::EC2::VPC::Id', 'Description': 'VPC for the services'},
        'SubnetIds': {'Type': 'List<AWS::EC2::Subnet::Id>', 'Description': 'Private subnets for the tasks'},
        'VpcCidr': {'Type': 'String', 'Default': '10.0.0.0/16', 'Description': 'CIDR allowed to reach the services'},
    }
    for service in deploy.services:
        for key in service.secrets:
            parameters[f'{logical_id(service.name)}{logical_id(key)}'] = {
                'Type': 'String',
                'NoEcho': True,
                'Description': f'{key} for {service.name}',
            }

    ingress: List[Dict[str, Any]] = [
        {'IpProtocol': 'tcp', 'FromPort': s.port, 'ToPort': s.port, 'CidrIp': {'Ref': 'VpcCidr'}}
        for s in deploy.services
    ]

    resources: Dict[str, Any] = {
        'Cluster': {
            'Type': 'AWS::ECS::Cluster',
            'Properties': {'ClusterName': f'{deploy.project_name}-{deploy.environment}'},
        },
        'LogGroup': {
            'Type': 'AWS::Logs::LogGroup',
            'Properties': {'LogGroupName': f'/ecs/{deploy.project_name}', 'RetentionInDays': 14},
        },
        'ExecutionRole': {
            'Type': 'AWS::IAM::Role',
            'Properties': {
                'AssumeRolePolicyDocument': {
                    'Version': '2012-10-17',
                    'Statement': [{
                        'Effect': 'Allow',
                        'Principal': {'Service': 'ecs-tasks.amazonaws.com'},
                        'Action': 'sts:AssumeRole',
                    }],
                },
                'ManagedPolicyArns': [
                    'arn:aws:iam::aws:policy/service-role/AmazonECSTaskExecutionRolePolicy',
                ],
            },
        },
        'ServiceSecurityGroup': {
            'Type': 'AWS::EC2::SecurityGroup',
            'Properties': {
                'GroupDescription': f'{deploy.project_name} services',
                'VpcId': {'Ref': 'VpcId'},
                'SecurityGroupIngress': ingress,
            },
        },
    }

    for service in deploy.services:
        sid = logical_id(service.name)
        resources[f'{sid}TaskDefinition'] = _task_definition(deploy, service)
        resources[f'{sid}Service'] = _ecs_service(service)

    return {
        'AWSTemplateFormatVersion': '2010-09-09',
        'Description': f'{deploy.project_name} {deploy.version} on ECS Fargate ({deploy.environment})',
        'Parameters': parameters,
        'Resources': resources,
        'Outputs': {
            'ClusterName': {'Value': {'Ref': 'Cluster'}},
            'LogGroupName': {'Value': {'Ref': 'LogGroup'}},
        },
    }


def generate_cloudformation(deploy: DeploymentConfig) -> Manifest:
    return Manifest(CLOUDFORMATION_FILENAME, dumps(cloudformation_template(deploy), indent=2))
