import plugin


class _Registry:
    def __init__(self):
        self.calls = []

    def register(self, *args):
        self.calls.append(args)


def test_register_passes_manifest_to_host():
    registry = _Registry()
    manifest = plugin.register(registry)
    assert manifest is plugin.PLUGIN
    assert registry.calls == [
        (
            "Galette Fullcard",
            "Full member card as PDF",
            "Johan Cwiklinski",
            "2.0.0",
            "1.1.0",
            "fullcard",
            "2023-12-07",
            {},
        )
    ]


def test_is_compatible():
    assert plugin.is_compatible("1.1.0")
    assert plugin.is_compatible("1.1")
    assert plugin.is_compatible("1.2.3")
    assert plugin.is_compatible("2.0.0-rc1")
    assert not plugin.is_compatible("1.0.9")
    assert not plugin.is_compatible("0.9.6")
