from pydantic import BaseModel

class Settings(BaseModel):
    app_title: str = "Bus Checker"

    # Preselected in the form and used when the CLI gets no bus type
    default_bus_type: str = "28vdc"

    # "Generated" stamp on the printable report
    report_timezone: str = "America/Chicago"

settings = Settings()
