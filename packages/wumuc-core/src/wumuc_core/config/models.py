from pydantic import BaseModel, Field
from typing import Literal


class ResourceFilesConfig(BaseModel):
    mandatory: list[str] = Field(
        default_factory=lambda: ["update-descriptor.yaml", "LICENSE.txt"]
    )
    optional: list[str] = Field(
        default_factory=lambda: ["README.txt", "instructions.txt", "NOT_A_CONTRIBUTION.txt"]
    )
    skip: list[str] = Field(default_factory=list)

    def ignored_names(self) -> set[str]:
        """Names excluded when scanning the update directory."""
        return set(self.mandatory) | set(self.optional) | set(self.skip)

    def copied_names(self) -> dict[str, bool]:
        """Resource files copied into the update, mapped to whether they are mandatory."""
        copied = {name: False for name in self.optional}
        copied.update({name: True for name in self.mandatory})
        return copied


class UpdateConfig(BaseModel):
    name_prefix: str = Field(default="WSO2-CARBON-UPDATE", min_length=1)
    descriptor_file: str = Field(default="update-descriptor.yaml", min_length=1)
    carbon_home: str = Field(default="carbon.home", min_length=1)
    staging_dir: str = Field(default="temp", min_length=1)


class WumucConfig(BaseModel):
    resources: ResourceFilesConfig = Field(default_factory=ResourceFilesConfig)
    update: UpdateConfig = Field(default_factory=UpdateConfig)
    check_hashes: bool = True
    log_level: Literal["debug", "info", "warn", "error"] = "warn"
    log_format: Literal["text", "json"] = "text"
