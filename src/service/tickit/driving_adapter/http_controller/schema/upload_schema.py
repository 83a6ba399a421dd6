from src.service.tickit.driving_adapter.http_controller.schema.camel_model import CamelModel


class UploadResponse(CamelModel):
    url: str
