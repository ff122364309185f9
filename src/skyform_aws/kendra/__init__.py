"""Kendra indexes, FAQs and data sources."""

from .data_source import KendraDataSourceResource
from .data_source_configuration import (
    DatabaseAclConfiguration,
    DatabaseColumnConfiguration,
    DatabaseConnectionConfiguration,
    DatabaseSqlConfiguration,
    KendraDatabaseConfiguration,
    KendraDataSourceConfiguration,
    KendraDataSourceToIndexFieldMapping,
    KendraDataSourceVpcConfiguration,
    KendraDocumentsMetadataConfiguration,
    KendraOneDriveConfiguration,
    KendraOneDriveUsers,
    KendraS3DataSourceConfiguration,
    KendraS3Path,
    KendraSalesforceChatterFeedConfiguration,
    KendraSalesforceConfiguration,
    KendraSalesforceCustomKnowledgeArticleTypeConfiguration,
    KendraSalesforceKnowledgeArticleConfiguration,
    KendraSalesforceStandardKnowledgeArticleTypeConfiguration,
    KendraSalesforceStandardObjectAttachmentConfiguration,
    KendraSalesforceStandardObjectConfiguration,
    KendraServiceNowConfiguration,
    KendraServiceNowKnowledgeArticleConfiguration,
    KendraServiceNowServiceCatalogConfiguration,
    KendraSharePointConfiguration,
)
from .faq import KendraFaqResource
from .finders import KendraIndexFinder
from .index import KendraCapacityUnitsConfiguration, KendraIndexResource, KendraServerSideEncryptionConfiguration

__all__ = [
    'DatabaseAclConfiguration',
    'DatabaseColumnConfiguration',
    'DatabaseConnectionConfiguration',
    'DatabaseSqlConfiguration',
    'KendraCapacityUnitsConfiguration',
    'KendraDatabaseConfiguration',
    'KendraDataSourceConfiguration',
    'KendraDataSourceResource',
    'KendraDataSourceToIndexFieldMapping',
    'KendraDataSourceVpcConfiguration',
    'KendraDocumentsMetadataConfiguration',
    'KendraFaqResource',
    'KendraIndexFinder',
    'KendraIndexResource',
    'KendraOneDriveConfiguration',
    'KendraOneDriveUsers',
    'KendraS3DataSourceConfiguration',
    'KendraS3Path',
    'KendraSalesforceChatterFeedConfiguration',
    'KendraSalesforceConfiguration',
    'KendraSalesforceCustomKnowledgeArticleTypeConfiguration',
    'KendraSalesforceKnowledgeArticleConfiguration',
    'KendraSalesforceStandardKnowledgeArticleTypeConfiguration',
    'KendraSalesforceStandardObjectAttachmentConfiguration',
    'KendraSalesforceStandardObjectConfiguration',
    'KendraServerSideEncryptionConfiguration',
    'KendraServiceNowConfiguration',
    'KendraServiceNowKnowledgeArticleConfiguration',
    'KendraServiceNowServiceCatalogConfiguration',
    'KendraSharePointConfiguration',
]
