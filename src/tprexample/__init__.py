__version__ = "0.1.0"
__description__ = (
    "Example program registering a ThirdPartyResource-style custom API type and managing "
    "instances of it through a scoped REST client"
)
