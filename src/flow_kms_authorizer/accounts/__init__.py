from flow_kms_authorizer.accounts.gcp_kms_authorizer import GcpKmsAuthorizer

__all__ = ["GcpKmsAuthorizer"]
