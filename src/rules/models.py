from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class GatewayRules(BaseModel):
    base_url_env: str = "SUPABASE_URL"
    api_key_env: str = "SUPABASE_ANON_KEY"
    functions_path: str = "/functions/v1"
    timeout_seconds: float = Field(default=10.0, gt=0)


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)
    log_level: str = "INFO"


class Rules(BaseModel):
    project: ProjectRules
    gateway: GatewayRules = Field(default_factory=GatewayRules)
    ops: OpsRules = Field(default_factory=OpsRules)
