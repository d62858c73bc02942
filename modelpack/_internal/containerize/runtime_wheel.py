import attrs


@attrs.frozen
class RuntimeWheel:
    """
    A wheel installed into every image, e.g. the model server package.

    ``filename`` should be a full wheel filename, since pip refuses to
    install wheels with other names.
    """

    filename: str = attrs.field()
    content: bytes = attrs.field(repr=lambda content: f"<{len(content)} bytes>")

    @filename.validator
    def _check_filename(self, attribute, value: str):
        if not value.endswith(".whl") or "/" in value:
            raise ValueError(f"Not a wheel filename: {value}")
