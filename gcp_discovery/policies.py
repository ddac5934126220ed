"""
Resource kinds discovered in GCP and the policy applied to each of them.
"""

from shared.kind_policy import IdentifierRule, KindPolicy, PolicyTable

SQL_INSTANCE = "google_sql_database_instance"
SQL_DATABASE = "google_sql_database"
NOTIFICATION_CHANNEL = "google_monitoring_notification_channel"
UPTIME_CHECK = "google_monitoring_uptime_check_config"

cloudsql_allow_empty_values = ()
cloudsql_additional_fields = {}

monitoring_allow_empty_values = ()
monitoring_additional_fields = {}

GCP_KIND_POLICIES = PolicyTable(
    [
        KindPolicy(
            kind=SQL_INSTANCE,
            allow_empty_fields=cloudsql_allow_empty_values,
            additional_fields=cloudsql_additional_fields,
        ),
        KindPolicy(
            kind=SQL_DATABASE,
            allow_empty_fields=cloudsql_allow_empty_values,
            additional_fields=cloudsql_additional_fields,
            identifier_rule=IdentifierRule.PARENT_SCOPED,
        ),
        # Monitoring resources are imported by their full resource name
        KindPolicy(
            kind=NOTIFICATION_CHANNEL,
            allow_empty_fields=monitoring_allow_empty_values,
            additional_fields=monitoring_additional_fields,
            identity_attributes=("name",),
        ),
        KindPolicy(
            kind=UPTIME_CHECK,
            allow_empty_fields=monitoring_allow_empty_values,
            additional_fields=monitoring_additional_fields,
            identity_attributes=("name",),
        ),
    ]
)
