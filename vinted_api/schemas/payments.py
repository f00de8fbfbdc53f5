from pydantic import BaseModel, ConfigDict, Field


class PaymentRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	amount: float = Field(gt=0, allow_inf_nan=False)
	title: str = Field(min_length=1)
	source_token: str = Field(alias="stripeToken", min_length=1)


class PaymentOut(BaseModel):
	status: str
