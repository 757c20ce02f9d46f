"""Environment-driven defaults.

Settings are resolved from environment variables prefixed with
`BDD_ASSEMBLY_` and only supply defaults: explicit arguments passed to
`build_support_code` or `make_test_plan` always take precedence.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from bdd_assembly import ids
from bdd_assembly.models import SettingsModel
from bdd_assembly.plan.naming import NamingExampleName, NamingFeatureName, NamingLength, NamingStrategy


class Settings(SettingsModel):
    """Runtime settings of the assembly core."""

    model_config = SettingsConfigDict(
        env_prefix='BDD_ASSEMBLY_',
        frozen=True,
        extra='ignore',
    )

    id_generator: Literal['uuid', 'incrementing'] = Field(
        default='uuid',
        title='Identifier generator',
        description=(
            'Source of identifiers for definitions, test cases and test steps. '
            '`incrementing` produces deterministic ids and is meant for tests.'
        ),
    )

    naming_length: NamingLength = Field(
        default=NamingLength.LONG,
        title='Test case name length',
    )

    naming_feature_name: NamingFeatureName = Field(
        default=NamingFeatureName.EXCLUDE,
        title='Feature name in test case names',
    )

    naming_example_name: NamingExampleName = Field(
        default=NamingExampleName.NUMBER,
        title='Example naming in test case names',
    )

    def new_id(self) -> ids.NewId:
        """Create the configured identifier generator."""
        if self.id_generator == 'incrementing':
            return ids.incrementing()

        return ids.uuid()

    def naming_strategy(self) -> NamingStrategy:
        """Create the configured naming strategy."""
        return NamingStrategy(
            length=self.naming_length,
            feature_name=self.naming_feature_name,
            example_name=self.naming_example_name,
        )
