"""
Embedded YAML configuration template for aws-vpc-preflight.

The template is embedded in the code so it stays in sync with schema.py.
'aws-vpc-preflight init' writes it to 'aws-vpc-preflight.config.yaml' in the
current directory for the user to customize.
"""

# Schema version aligned with schema.py
SCHEMA_VERSION = 1

DEFAULT_CONFIG_TEMPLATE = """\
# aws-vpc-preflight configuration
# Generated from embedded template (schema version {version})
#
# YAML structure:
#   - cluster_name: owner of the NAT gateways (tag kubernetes.io/cluster/<name>)
#   - region: AWS region (can be overridden with --region / AWS_REGION)
#   - networks.vpc: existing VPC to validate (omit id to create a new one)
#   - networks.zones: per-zone resources, optionally with a pre-existing
#     Elastic IP allocation for the zone's NAT gateway
#
# Environment variables: Use ${{VAR}} syntax (e.g., ${{VPC_ID}})

version: {version}

cluster_name: "${{CLUSTER_NAME}}"
region: "${{AWS_REGION}}"  # Examples: eu-west-1, us-east-1

networks:
  vpc:
    # Existing VPC; it must have enableDnsSupport and enableDnsHostnames
    # set to true and an attached internet gateway.
    id: "${{VPC_ID}}"

  zones:
    - name: "eu-west-1a"
      # Optional: Elastic IP allocation that must exist and be either unassociated
      # or already attached to one of this cluster's NAT gateways.
      # elasticIPAllocationID: "eipalloc-0e2669d4b46150ee4"

###############################################################################
# Next Steps:
# 1. Export CLUSTER_NAME, AWS_REGION and VPC_ID (or replace the placeholders)
# 2. Check the file without calling AWS:
#      aws-vpc-preflight validate-config aws-vpc-preflight.config.yaml
# 3. Validate against the live account:
#      aws-vpc-preflight validate --local-config-file aws-vpc-preflight.config.yaml
###############################################################################
""".format(version=SCHEMA_VERSION)
