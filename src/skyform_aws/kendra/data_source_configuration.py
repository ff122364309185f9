"""Connector settings of Kendra data sources.

A data source holds exactly one connector block: database, OneDrive, S3,
Salesforce, ServiceNow or SharePoint. Every block maps onto the matching
member of the ``Configuration`` structure of CreateDataSource.
"""

from typing import Any, Dict, List, Optional, Set

from ..core.diffable import Diffable, FieldError, compact, is_set
from ..core.fields import attr

SALESFORCE_STANDARD_OBJECTS = [
    'ACCOUNT', 'CAMPAIGN', 'CASE', 'CONTACT', 'CONTRACT', 'DOCUMENT', 'GROUP', 'IDEA',
    'LEAD', 'OPPORTUNITY', 'PARTNER', 'PRICEBOOK', 'PRODUCT', 'PROFILE', 'SOLUTION',
    'TASK', 'USER',
]


class KendraDataSourceToIndexFieldMapping(Diffable):
    """Maps a field of the source documents onto an index field."""

    data_source_field_name: Optional[str] = attr(required=True, updatable=True)
    date_field_format: Optional[str] = attr(updatable=True)
    index_field_name: Optional[str] = attr(required=True, updatable=True)

    def primary_key(self) -> str:
        return f"{self.data_source_field_name} -> {self.index_field_name}"

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.data_source_field_name = model.get('DataSourceFieldName')
        self.date_field_format = model.get('DateFieldFormat')
        self.index_field_name = model.get('IndexFieldName')

    def to_field_mapping(self) -> Dict[str, Any]:
        return compact(
            DataSourceFieldName=self.data_source_field_name,
            DateFieldFormat=self.date_field_format,
            IndexFieldName=self.index_field_name,
        )


def copy_field_mappings(parent: Diffable, items: Optional[List[Dict[str, Any]]]) -> List[KendraDataSourceToIndexFieldMapping]:
    mappings = []
    for item in items or []:
        mapping = parent.new_subresource(KendraDataSourceToIndexFieldMapping)
        mapping.copy_from(item)
        mappings.append(mapping)
    return mappings


def field_mappings_request(mappings: List[KendraDataSourceToIndexFieldMapping]) -> Optional[List[Dict[str, Any]]]:
    return [mapping.to_field_mapping() for mapping in mappings] or None


class KendraS3Path(Diffable):
    """An object in S3."""

    bucket: Optional[str] = attr(required=True)
    key: Optional[str] = attr(required=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.bucket = model.get('Bucket')
        self.key = model.get('Key')

    def to_s3_path(self) -> Dict[str, Any]:
        return {'Bucket': self.bucket, 'Key': self.key}


class KendraDataSourceVpcConfiguration(Diffable):
    """Subnets and security groups a connector reaches its source through."""

    security_group_ids: List[str] = attr(default_factory=list, required=True, updatable=True)
    subnet_ids: List[str] = attr(default_factory=list, required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.security_group_ids = list(model.get('SecurityGroupIds') or [])
        self.subnet_ids = list(model.get('SubnetIds') or [])

    def to_vpc_configuration(self) -> Dict[str, Any]:
        return {'SecurityGroupIds': self.security_group_ids, 'SubnetIds': self.subnet_ids}


# -- database ---------------------------------------------------------------


class DatabaseAclConfiguration(Diffable):
    allowed_groups_column_name: Optional[str] = attr(required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.allowed_groups_column_name = model.get('AllowedGroupsColumnName')

    def to_acl_configuration(self) -> Dict[str, Any]:
        return {'AllowedGroupsColumnName': self.allowed_groups_column_name}


class DatabaseColumnConfiguration(Diffable):
    """Columns holding the document id, body and title.

    ``change-detecting-columns`` lists up to five columns Kendra compares to
    find changed rows.
    """

    change_detecting_columns: List[str] = attr(
        default_factory=list, required=True, updatable=True, collection_max=5)
    document_data_column_name: Optional[str] = attr(required=True, updatable=True)
    document_id_column_name: Optional[str] = attr(required=True, updatable=True)
    document_title_column_name: Optional[str] = attr(updatable=True)
    field_mapping: List[KendraDataSourceToIndexFieldMapping] = attr(default_factory=list, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.change_detecting_columns = list(model.get('ChangeDetectingColumns') or [])
        self.document_data_column_name = model.get('DocumentDataColumnName')
        self.document_id_column_name = model.get('DocumentIdColumnName')
        self.document_title_column_name = model.get('DocumentTitleColumnName')
        self.field_mapping = copy_field_mappings(self, model.get('FieldMappings'))

    def to_column_configuration(self) -> Dict[str, Any]:
        return compact(
            ChangeDetectingColumns=self.change_detecting_columns,
            DocumentDataColumnName=self.document_data_column_name,
            DocumentIdColumnName=self.document_id_column_name,
            DocumentTitleColumnName=self.document_title_column_name,
            FieldMappings=field_mappings_request(self.field_mapping),
        )


class DatabaseConnectionConfiguration(Diffable):
    database_host: Optional[str] = attr(required=True, updatable=True)
    database_name: Optional[str] = attr(required=True, updatable=True)
    database_port: Optional[int] = attr(required=True, updatable=True, range=(1, 65535))
    secret_arn: Optional[str] = attr(required=True, updatable=True)
    table_name: Optional[str] = attr(required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.database_host = model.get('DatabaseHost')
        self.database_name = model.get('DatabaseName')
        self.database_port = model.get('DatabasePort')
        self.secret_arn = model.get('SecretArn')
        self.table_name = model.get('TableName')

    def to_connection_configuration(self) -> Dict[str, Any]:
        return {
            'DatabaseHost': self.database_host,
            'DatabaseName': self.database_name,
            'DatabasePort': self.database_port,
            'SecretArn': self.secret_arn,
            'TableName': self.table_name,
        }


class DatabaseSqlConfiguration(Diffable):
    query_identifiers_enclosing_option: Optional[str] = attr(
        updatable=True, valid_strings=['DOUBLE_QUOTES', 'NONE'])

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.query_identifiers_enclosing_option = model.get('QueryIdentifiersEnclosingOption')

    def to_sql_configuration(self) -> Dict[str, Any]:
        return compact(QueryIdentifiersEnclosingOption=self.query_identifiers_enclosing_option)


class KendraDatabaseConfiguration(Diffable):
    """A relational database crawled table by table.

    Example:
        database-configuration:
          engine-type: RDS_POSTGRESQL
          column-configuration:
            document-id-column-name: id
            document-data-column-name: body
            change-detecting-columns: [updated_at]
          connection-configuration:
            database-host: example.cluster.us-east-1.rds.amazonaws.com
            database-name: documents
            database-port: 5432
            table-name: articles
            secret-arn: arn:aws:secretsmanager:us-east-1:123456789012:secret:example
    """

    engine_type: Optional[str] = attr(
        required=True, updatable=True,
        valid_strings=['RDS_AURORA_MYSQL', 'RDS_AURORA_POSTGRESQL', 'RDS_MYSQL', 'RDS_POSTGRESQL'])
    acl_configuration: Optional[DatabaseAclConfiguration] = attr(updatable=True)
    column_configuration: Optional[DatabaseColumnConfiguration] = attr(required=True, updatable=True)
    connection_configuration: Optional[DatabaseConnectionConfiguration] = attr(required=True, updatable=True)
    sql_configuration: Optional[DatabaseSqlConfiguration] = attr(updatable=True)
    vpc_configuration: Optional[KendraDataSourceVpcConfiguration] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.engine_type = model.get('DatabaseEngineType')
        self.acl_configuration = self._copy_block(DatabaseAclConfiguration, model.get('AclConfiguration'))
        self.column_configuration = self._copy_block(DatabaseColumnConfiguration, model.get('ColumnConfiguration'))
        self.connection_configuration = self._copy_block(
            DatabaseConnectionConfiguration, model.get('ConnectionConfiguration'))
        self.sql_configuration = self._copy_block(DatabaseSqlConfiguration, model.get('SqlConfiguration'))
        self.vpc_configuration = self._copy_block(KendraDataSourceVpcConfiguration, model.get('VpcConfiguration'))

    def _copy_block(self, cls, model: Optional[Dict[str, Any]]):
        if not model:
            return None
        block = self.new_subresource(cls)
        block.copy_from(model)
        return block

    def to_database_configuration(self) -> Dict[str, Any]:
        return compact(
            DatabaseEngineType=self.engine_type,
            AclConfiguration=self.acl_configuration.to_acl_configuration() if self.acl_configuration else None,
            ColumnConfiguration=self.column_configuration.to_column_configuration(),
            ConnectionConfiguration=self.connection_configuration.to_connection_configuration(),
            SqlConfiguration=self.sql_configuration.to_sql_configuration() if self.sql_configuration else None,
            VpcConfiguration=self.vpc_configuration.to_vpc_configuration() if self.vpc_configuration else None,
        )


# -- OneDrive ---------------------------------------------------------------


class KendraOneDriveUsers(Diffable):
    """Users whose OneDrive documents are indexed, inline or from a file in S3."""

    user_list: List[str] = attr(default_factory=list, updatable=True, conflicts_with=['user_s3_path'])
    user_s3_path: Optional[KendraS3Path] = attr(updatable=True, conflicts_with=['user_list'])

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.user_list = list(model.get('OneDriveUserList') or [])
        self.user_s3_path = None
        if model.get('OneDriveUserS3Path'):
            path = self.new_subresource(KendraS3Path)
            path.copy_from(model['OneDriveUserS3Path'])
            self.user_s3_path = path

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        if not is_set(self.user_list) and self.user_s3_path is None:
            return [self.error(None, "Either 'user-list' or 'user-s3-path' is required.")]
        return []

    def to_one_drive_users(self) -> Dict[str, Any]:
        return compact(
            OneDriveUserList=self.user_list or None,
            OneDriveUserS3Path=self.user_s3_path.to_s3_path() if self.user_s3_path else None,
        )


class KendraOneDriveConfiguration(Diffable):
    """OneDrive for Business documents of a Microsoft 365 tenant.

    Example:
        one-drive-configuration:
          secret: arn:aws:secretsmanager:us-east-1:123456789012:secret:example
          tenant-domain: example.onmicrosoft.com
          users:
            user-list: [user@example.onmicrosoft.com]
    """

    exclusion_patterns: List[str] = attr(default_factory=list, updatable=True)
    inclusion_patterns: List[str] = attr(default_factory=list, updatable=True)
    field_mapping: List[KendraDataSourceToIndexFieldMapping] = attr(default_factory=list, updatable=True)
    secret: Optional[str] = attr(required=True, updatable=True)
    tenant_domain: Optional[str] = attr(required=True, updatable=True)
    users: Optional[KendraOneDriveUsers] = attr(required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.exclusion_patterns = list(model.get('ExclusionPatterns') or [])
        self.inclusion_patterns = list(model.get('InclusionPatterns') or [])
        self.field_mapping = copy_field_mappings(self, model.get('FieldMappings'))
        self.secret = model.get('SecretArn')
        self.tenant_domain = model.get('TenantDomain')

        self.users = None
        if model.get('OneDriveUsers'):
            users = self.new_subresource(KendraOneDriveUsers)
            users.copy_from(model['OneDriveUsers'])
            self.users = users

    def to_one_drive_configuration(self) -> Dict[str, Any]:
        return compact(
            ExclusionPatterns=self.exclusion_patterns or None,
            InclusionPatterns=self.inclusion_patterns or None,
            FieldMappings=field_mappings_request(self.field_mapping),
            SecretArn=self.secret,
            TenantDomain=self.tenant_domain,
            OneDriveUsers=self.users.to_one_drive_users(),
        )


# -- S3 ---------------------------------------------------------------------


class KendraDocumentsMetadataConfiguration(Diffable):
    s3_prefix: Optional[str] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.s3_prefix = model.get('S3Prefix')

    def to_documents_metadata_configuration(self) -> Dict[str, Any]:
        return compact(S3Prefix=self.s3_prefix)


class KendraS3DataSourceConfiguration(Diffable):
    """Documents stored in an S3 bucket.

    Example:
        s3-configuration:
          bucket: example-documents
          inclusion-prefixes: [public/]
          exclusion-patterns: ['*.tmp']
          documents-metadata-configuration:
            s3-prefix: metadata/
    """

    bucket: Optional[str] = attr(required=True, updatable=True)
    access_control_list_key_path: Optional[str] = attr(updatable=True)
    documents_metadata_configuration: Optional[KendraDocumentsMetadataConfiguration] = attr(updatable=True)
    exclusion_patterns: List[str] = attr(default_factory=list, updatable=True)
    inclusion_prefixes: List[str] = attr(default_factory=list, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.bucket = model.get('BucketName')
        self.access_control_list_key_path = (model.get('AccessControlListConfiguration') or {}).get('KeyPath')
        self.exclusion_patterns = list(model.get('ExclusionPatterns') or [])
        self.inclusion_prefixes = list(model.get('InclusionPrefixes') or [])

        self.documents_metadata_configuration = None
        if model.get('DocumentsMetadataConfiguration'):
            config = self.new_subresource(KendraDocumentsMetadataConfiguration)
            config.copy_from(model['DocumentsMetadataConfiguration'])
            self.documents_metadata_configuration = config

    def to_s3_configuration(self) -> Dict[str, Any]:
        return compact(
            BucketName=self.bucket,
            AccessControlListConfiguration=(
                {'KeyPath': self.access_control_list_key_path} if self.access_control_list_key_path else None
            ),
            DocumentsMetadataConfiguration=(
                self.documents_metadata_configuration.to_documents_metadata_configuration()
                if self.documents_metadata_configuration else None
            ),
            ExclusionPatterns=self.exclusion_patterns or None,
            InclusionPrefixes=self.inclusion_prefixes or None,
        )


# -- Salesforce -------------------------------------------------------------


class DocumentFields(Diffable):
    """Body, title and field mappings of a crawled Salesforce or ServiceNow entity."""

    document_data_field_name: Optional[str] = attr(required=True, updatable=True)
    document_title_field_name: Optional[str] = attr(updatable=True)
    field_mapping: List[KendraDataSourceToIndexFieldMapping] = attr(default_factory=list, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.document_data_field_name = model.get('DocumentDataFieldName')
        self.document_title_field_name = model.get('DocumentTitleFieldName')
        self.field_mapping = copy_field_mappings(self, model.get('FieldMappings'))

    def document_fields_request(self) -> Dict[str, Any]:
        return compact(
            DocumentDataFieldName=self.document_data_field_name,
            DocumentTitleFieldName=self.document_title_field_name,
            FieldMappings=field_mappings_request(self.field_mapping),
        )


class KendraSalesforceChatterFeedConfiguration(DocumentFields):
    include_filter_types: List[str] = attr(
        default_factory=list, updatable=True, valid_strings=['ACTIVE_USER', 'STANDARD_USER'])

    def copy_from(self, model: Dict[str, Any]) -> None:
        super().copy_from(model)
        self.include_filter_types = list(model.get('IncludeFilterTypes') or [])

    def to_chatter_feed_configuration(self) -> Dict[str, Any]:
        return compact(IncludeFilterTypes=self.include_filter_types or None, **self.document_fields_request())


class KendraSalesforceCustomKnowledgeArticleTypeConfiguration(DocumentFields):
    name: Optional[str] = attr(required=True, updatable=True)

    def primary_key(self) -> str:
        return self.name or ''

    def copy_from(self, model: Dict[str, Any]) -> None:
        super().copy_from(model)
        self.name = model.get('Name')

    def to_custom_type_configuration(self) -> Dict[str, Any]:
        return compact(Name=self.name, **self.document_fields_request())


class KendraSalesforceStandardKnowledgeArticleTypeConfiguration(DocumentFields):

    def to_standard_type_configuration(self) -> Dict[str, Any]:
        return self.document_fields_request()


class KendraSalesforceKnowledgeArticleConfiguration(Diffable):
    """Knowledge articles, either of the standard type or of custom types."""

    custom_type_configuration: List[KendraSalesforceCustomKnowledgeArticleTypeConfiguration] = attr(
        default_factory=list, updatable=True, conflicts_with=['standard_type_configuration'])
    standard_type_configuration: Optional[KendraSalesforceStandardKnowledgeArticleTypeConfiguration] = attr(
        updatable=True, conflicts_with=['custom_type_configuration'])
    states: List[str] = attr(
        default_factory=list, required=True, updatable=True, valid_strings=['DRAFT', 'PUBLISHED', 'ARCHIVED'])

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.states = list(model.get('IncludedStates') or [])

        custom_types = []
        for item in model.get('CustomKnowledgeArticleTypeConfigurations') or []:
            config = self.new_subresource(KendraSalesforceCustomKnowledgeArticleTypeConfiguration)
            config.copy_from(item)
            custom_types.append(config)
        self.custom_type_configuration = custom_types

        self.standard_type_configuration = None
        if model.get('StandardKnowledgeArticleTypeConfiguration'):
            config = self.new_subresource(KendraSalesforceStandardKnowledgeArticleTypeConfiguration)
            config.copy_from(model['StandardKnowledgeArticleTypeConfiguration'])
            self.standard_type_configuration = config

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        if not is_set(self.custom_type_configuration) and self.standard_type_configuration is None:
            return [self.error(
                None, "Either 'custom-type-configuration' or 'standard-type-configuration' is required.")]
        return []

    def to_knowledge_article_configuration(self) -> Dict[str, Any]:
        request: Dict[str, Any] = {'IncludedStates': self.states}
        if self.custom_type_configuration:
            request['CustomKnowledgeArticleTypeConfigurations'] = [
                config.to_custom_type_configuration() for config in self.custom_type_configuration
            ]
        elif self.standard_type_configuration is not None:
            request['StandardKnowledgeArticleTypeConfiguration'] = (
                self.standard_type_configuration.to_standard_type_configuration()
            )
        return request


class KendraSalesforceStandardObjectAttachmentConfiguration(Diffable):
    document_title_field_name: Optional[str] = attr(updatable=True)
    field_mapping: List[KendraDataSourceToIndexFieldMapping] = attr(default_factory=list, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.document_title_field_name = model.get('DocumentTitleFieldName')
        self.field_mapping = copy_field_mappings(self, model.get('FieldMappings'))

    def to_object_attachment_configuration(self) -> Dict[str, Any]:
        return compact(
            DocumentTitleFieldName=self.document_title_field_name,
            FieldMappings=field_mappings_request(self.field_mapping),
        )


class KendraSalesforceStandardObjectConfiguration(DocumentFields):
    name: Optional[str] = attr(required=True, updatable=True, valid_strings=SALESFORCE_STANDARD_OBJECTS)

    def primary_key(self) -> str:
        return self.name or ''

    def copy_from(self, model: Dict[str, Any]) -> None:
        super().copy_from(model)
        self.name = model.get('Name')

    def to_object_configuration(self) -> Dict[str, Any]:
        return compact(Name=self.name, **self.document_fields_request())


class KendraSalesforceConfiguration(Diffable):
    """A Salesforce organization.

    Attachments are only crawled, and the attachment settings only accepted,
    when ``crawl-attachments`` is true.

    Example:
        salesforce-configuration:
          server-url: https://example.my.salesforce.com
          secret-arn: arn:aws:secretsmanager:us-east-1:123456789012:secret:example
          knowledge-article-configuration:
            states: [PUBLISHED]
            standard-type-configuration:
              document-data-field-name: Summary
    """

    chatter_feed_configuration: Optional[KendraSalesforceChatterFeedConfiguration] = attr(updatable=True)
    crawl_attachments: Optional[bool] = attr(updatable=True)
    exclude_attachment_file_patterns: List[str] = attr(
        default_factory=list, updatable=True, depends_on='crawl_attachments')
    include_attachment_file_patterns: List[str] = attr(
        default_factory=list, updatable=True, depends_on='crawl_attachments')
    knowledge_article_configuration: Optional[KendraSalesforceKnowledgeArticleConfiguration] = attr(updatable=True)
    secret_arn: Optional[str] = attr(required=True, updatable=True)
    server_url: Optional[str] = attr(required=True, updatable=True)
    object_attachment_configuration: Optional[KendraSalesforceStandardObjectAttachmentConfiguration] = attr(
        updatable=True, depends_on='crawl_attachments')
    object_configuration: List[KendraSalesforceStandardObjectConfiguration] = attr(
        default_factory=list, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.secret_arn = model.get('SecretArn')
        self.server_url = model.get('ServerUrl')
        self.crawl_attachments = model.get('CrawlAttachments')
        self.exclude_attachment_file_patterns = list(model.get('ExcludeAttachmentFilePatterns') or [])
        self.include_attachment_file_patterns = list(model.get('IncludeAttachmentFilePatterns') or [])

        self.chatter_feed_configuration = None
        if model.get('ChatterFeedConfiguration'):
            config = self.new_subresource(KendraSalesforceChatterFeedConfiguration)
            config.copy_from(model['ChatterFeedConfiguration'])
            self.chatter_feed_configuration = config

        self.knowledge_article_configuration = None
        if model.get('KnowledgeArticleConfiguration'):
            config = self.new_subresource(KendraSalesforceKnowledgeArticleConfiguration)
            config.copy_from(model['KnowledgeArticleConfiguration'])
            self.knowledge_article_configuration = config

        self.object_attachment_configuration = None
        if model.get('StandardObjectAttachmentConfiguration'):
            config = self.new_subresource(KendraSalesforceStandardObjectAttachmentConfiguration)
            config.copy_from(model['StandardObjectAttachmentConfiguration'])
            self.object_attachment_configuration = config

        objects = []
        for item in model.get('StandardObjectConfigurations') or []:
            config = self.new_subresource(KendraSalesforceStandardObjectConfiguration)
            config.copy_from(item)
            objects.append(config)
        self.object_configuration = objects

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        errors = []

        attachments = (
            self.object_attachment_configuration is not None
            or is_set(self.exclude_attachment_file_patterns)
            or is_set(self.include_attachment_file_patterns)
        )
        if not self.crawl_attachments and attachments:
            errors.append(self.error(
                None, "'crawl-attachments' should be set to 'TRUE' to provide 'object-attachment-configuration', "
                      "'exclude-attachment-file-patterns' or 'include-attachment-file-patterns'"))

        if (self.chatter_feed_configuration is None and self.knowledge_article_configuration is None
                and not is_set(self.object_configuration)):
            errors.append(self.error(
                None, "At least one of 'chatter-feed-configuration', 'knowledge-article-configuration' "
                      "or 'object-configuration' is required."))

        return errors

    def to_salesforce_configuration(self) -> Dict[str, Any]:
        chatter = self.chatter_feed_configuration
        knowledge = self.knowledge_article_configuration
        attachment = self.object_attachment_configuration
        return compact(
            ServerUrl=self.server_url,
            SecretArn=self.secret_arn,
            CrawlAttachments=self.crawl_attachments,
            ChatterFeedConfiguration=chatter.to_chatter_feed_configuration() if chatter else None,
            KnowledgeArticleConfiguration=knowledge.to_knowledge_article_configuration() if knowledge else None,
            StandardObjectAttachmentConfiguration=attachment.to_object_attachment_configuration() if attachment else None,
            StandardObjectConfigurations=[
                config.to_object_configuration() for config in self.object_configuration
            ] or None,
            ExcludeAttachmentFilePatterns=self.exclude_attachment_file_patterns or None,
            IncludeAttachmentFilePatterns=self.include_attachment_file_patterns or None,
        )


# -- ServiceNow -------------------------------------------------------------


class ServiceNowAttachmentFields(DocumentFields):
    """Attachment and document settings shared by the ServiceNow blocks."""

    crawl_attachments: Optional[bool] = attr(updatable=True)
    exclude_attachment_file_patterns: List[str] = attr(
        default_factory=list, updatable=True, depends_on='crawl_attachments')
    include_attachment_file_patterns: List[str] = attr(
        default_factory=list, updatable=True, depends_on='crawl_attachments')

    def copy_from(self, model: Dict[str, Any]) -> None:
        super().copy_from(model)
        self.crawl_attachments = model.get('CrawlAttachments')
        self.exclude_attachment_file_patterns = list(model.get('ExcludeAttachmentFilePatterns') or [])
        self.include_attachment_file_patterns = list(model.get('IncludeAttachmentFilePatterns') or [])

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        patterns = is_set(self.exclude_attachment_file_patterns) or is_set(self.include_attachment_file_patterns)
        if not self.crawl_attachments and patterns:
            return [self.error(
                None, "'crawl-attachments' should be set to 'TRUE' to provide "
                      "'exclude-attachment-file-patterns' or 'include-attachment-file-patterns'")]
        return []

    def attachment_fields_request(self) -> Dict[str, Any]:
        return compact(
            CrawlAttachments=self.crawl_attachments,
            ExcludeAttachmentFilePatterns=self.exclude_attachment_file_patterns or None,
            IncludeAttachmentFilePatterns=self.include_attachment_file_patterns or None,
            **self.document_fields_request()
        )


class KendraServiceNowKnowledgeArticleConfiguration(ServiceNowAttachmentFields):
    filter_query: Optional[str] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        super().copy_from(model)
        self.filter_query = model.get('FilterQuery')

    def to_knowledge_article_configuration(self) -> Dict[str, Any]:
        return compact(FilterQuery=self.filter_query, **self.attachment_fields_request())


class KendraServiceNowServiceCatalogConfiguration(ServiceNowAttachmentFields):

    def to_service_catalog_configuration(self) -> Dict[str, Any]:
        return self.attachment_fields_request()


class KendraServiceNowConfiguration(Diffable):
    """A ServiceNow instance.

    Example:
        service-now-configuration:
          host-url: example.service-now.com
          secret-arn: arn:aws:secretsmanager:us-east-1:123456789012:secret:example
          version-type: LONDON
          service-catalog-configuration:
            document-data-field-name: description
    """

    host_url: Optional[str] = attr(required=True, updatable=True)
    secret_arn: Optional[str] = attr(required=True, updatable=True)
    version_type: Optional[str] = attr(required=True, updatable=True, valid_strings=['LONDON', 'OTHERS'])
    knowledge_article_configuration: Optional[KendraServiceNowKnowledgeArticleConfiguration] = attr(updatable=True)
    service_catalog_configuration: Optional[KendraServiceNowServiceCatalogConfiguration] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.host_url = model.get('HostUrl')
        self.secret_arn = model.get('SecretArn')
        self.version_type = model.get('ServiceNowBuildVersion')

        self.knowledge_article_configuration = None
        if model.get('KnowledgeArticleConfiguration'):
            config = self.new_subresource(KendraServiceNowKnowledgeArticleConfiguration)
            config.copy_from(model['KnowledgeArticleConfiguration'])
            self.knowledge_article_configuration = config

        self.service_catalog_configuration = None
        if model.get('ServiceCatalogConfiguration'):
            config = self.new_subresource(KendraServiceNowServiceCatalogConfiguration)
            config.copy_from(model['ServiceCatalogConfiguration'])
            self.service_catalog_configuration = config

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        if self.knowledge_article_configuration is None and self.service_catalog_configuration is None:
            return [self.error(
                None,
                "At least one of 'knowledge-article-configuration' or 'service-catalog-configuration' is required.")]
        return []

    def to_service_now_configuration(self) -> Dict[str, Any]:
        knowledge = self.knowledge_article_configuration
        catalog = self.service_catalog_configuration
        return compact(
            HostUrl=self.host_url,
            SecretArn=self.secret_arn,
            ServiceNowBuildVersion=self.version_type,
            KnowledgeArticleConfiguration=knowledge.to_knowledge_article_configuration() if knowledge else None,
            ServiceCatalogConfiguration=catalog.to_service_catalog_configuration() if catalog else None,
        )


# -- SharePoint -------------------------------------------------------------


class KendraSharePointConfiguration(Diffable):
    """SharePoint Online sites.

    Example:
        share-point-configuration:
          share-point-version: SHAREPOINT_ONLINE
          secret-arn: arn:aws:secretsmanager:us-east-1:123456789012:secret:example
          urls: [https://example.sharepoint.com/sites/docs]
    """

    crawl_attachments: Optional[bool] = attr(updatable=True)
    document_title_field_name: Optional[str] = attr(updatable=True)
    exclusion_patterns: List[str] = attr(default_factory=list, updatable=True)
    inclusion_patterns: List[str] = attr(default_factory=list, updatable=True)
    field_mapping: List[KendraDataSourceToIndexFieldMapping] = attr(default_factory=list, updatable=True)
    secret_arn: Optional[str] = attr(required=True, updatable=True)
    share_point_version: Optional[str] = attr(required=True, updatable=True, valid_strings=['SHAREPOINT_ONLINE'])
    urls: List[str] = attr(default_factory=list, required=True, updatable=True, collection_max=99)
    use_change_log: Optional[bool] = attr(updatable=True)
    vpc_configuration: Optional[KendraDataSourceVpcConfiguration] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.crawl_attachments = model.get('CrawlAttachments')
        self.document_title_field_name = model.get('DocumentTitleFieldName')
        self.exclusion_patterns = list(model.get('ExclusionPatterns') or [])
        self.inclusion_patterns = list(model.get('InclusionPatterns') or [])
        self.field_mapping = copy_field_mappings(self, model.get('FieldMappings'))
        self.secret_arn = model.get('SecretArn')
        self.share_point_version = model.get('SharePointVersion')
        self.urls = list(model.get('Urls') or [])
        self.use_change_log = model.get('UseChangeLog')

        self.vpc_configuration = None
        if model.get('VpcConfiguration'):
            config = self.new_subresource(KendraDataSourceVpcConfiguration)
            config.copy_from(model['VpcConfiguration'])
            self.vpc_configuration = config

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        if not self.crawl_attachments and self.document_title_field_name is not None:
            return [self.error(
                None, "'crawl-attachments' should be set to 'TRUE' to provide 'document-title-field-name'")]
        return []

    def to_share_point_configuration(self) -> Dict[str, Any]:
        return compact(
            CrawlAttachments=self.crawl_attachments,
            DocumentTitleFieldName=self.document_title_field_name,
            ExclusionPatterns=self.exclusion_patterns or None,
            InclusionPatterns=self.inclusion_patterns or None,
            FieldMappings=field_mappings_request(self.field_mapping),
            SecretArn=self.secret_arn,
            SharePointVersion=self.share_point_version,
            Urls=self.urls,
            UseChangeLog=self.use_change_log,
            VpcConfiguration=self.vpc_configuration.to_vpc_configuration() if self.vpc_configuration else None,
        )


# -- data source ------------------------------------------------------------

CONNECTORS = {
    'database_configuration': ('DatabaseConfiguration', KendraDatabaseConfiguration, 'to_database_configuration'),
    'one_drive_configuration': ('OneDriveConfiguration', KendraOneDriveConfiguration, 'to_one_drive_configuration'),
    's3_configuration': ('S3Configuration', KendraS3DataSourceConfiguration, 'to_s3_configuration'),
    'salesforce_configuration': (
        'SalesforceConfiguration', KendraSalesforceConfiguration, 'to_salesforce_configuration'),
    'service_now_configuration': (
        'ServiceNowConfiguration', KendraServiceNowConfiguration, 'to_service_now_configuration'),
    'share_point_configuration': (
        'SharePointConfiguration', KendraSharePointConfiguration, 'to_share_point_configuration'),
}


def _others(name: str) -> List[str]:
    return [other for other in CONNECTORS if other != name]


class KendraDataSourceConfiguration(Diffable):
    """The connector of a data source. Exactly one block must be set."""

    database_configuration: Optional[KendraDatabaseConfiguration] = attr(
        updatable=True, conflicts_with=_others('database_configuration'))
    one_drive_configuration: Optional[KendraOneDriveConfiguration] = attr(
        updatable=True, conflicts_with=_others('one_drive_configuration'))
    s3_configuration: Optional[KendraS3DataSourceConfiguration] = attr(
        updatable=True, conflicts_with=_others('s3_configuration'))
    salesforce_configuration: Optional[KendraSalesforceConfiguration] = attr(
        updatable=True, conflicts_with=_others('salesforce_configuration'))
    service_now_configuration: Optional[KendraServiceNowConfiguration] = attr(
        updatable=True, conflicts_with=_others('service_now_configuration'))
    share_point_configuration: Optional[KendraSharePointConfiguration] = attr(
        updatable=True, conflicts_with=_others('share_point_configuration'))

    def copy_from(self, model: Dict[str, Any]) -> None:
        for name, (key, cls, _) in CONNECTORS.items():
            block = None
            if model.get(key):
                block = self.new_subresource(cls)
                block.copy_from(model[key])
            setattr(self, name, block)

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        if all(getattr(self, name) is None for name in CONNECTORS):
            return [self.error(
                None, "At least one of 'database-configuration', 'one-drive-configuration', 's3-configuration', "
                      "'salesforce-configuration', 'service-now-configuration' or 'share-point-configuration' "
                      "is required.")]
        return []

    def to_data_source_configuration(self) -> Dict[str, Any]:
        request = {}
        for name, (key, _, builder) in CONNECTORS.items():
            block = getattr(self, name)
            if block is not None:
                request[key] = getattr(block, builder)()
        return request
