"""Test that the quickstart API works for ufunc-override."""
from __future__ import annotations


def test_quickstart_imports() -> None:
    import ufunc_override

    assert callable(ufunc_override.resolve)
    assert callable(ufunc_override.operation)


def test_version(package_name: str, expected_version: str) -> None:
    import importlib

    module = importlib.import_module(package_name)
    assert module.__version__ == expected_version


def test_all_exports_exist() -> None:
    import ufunc_override

    for name in ufunc_override.__all__:
        assert hasattr(ufunc_override, name), name


def test_quickstart_override_flow() -> None:
    import ufunc_override as uo

    @uo.operation(nin=2)
    def multiply(x, y, out=None):
        return x * y

    class Units(uo.SupportsOverride):
        def __init__(self, value: float, unit: str) -> None:
            self.value = value
            self.unit = unit

        def __ufunc_override__(self, operation, method, position, inputs, kwargs):
            if operation is not multiply:
                return uo.DECLINED
            values = [v.value if isinstance(v, Units) else v for v in inputs]
            return Units(operation.func(*values), self.unit)

    assert multiply(3, 4) == 12
    scaled = multiply(2, Units(5.0, "m"))
    assert (scaled.value, scaled.unit) == (10.0, "m")


def test_quickstart_load_config(tmp_path) -> None:
    import ufunc_override as uo

    path = tmp_path / "override.yaml"
    path.write_text("ufunc_override:\n  max_arity: 4\n", encoding="utf-8")
    config = uo.load_config(str(path))
    assert config.max_arity == 4
    assert uo.resolve(object(), "__call__", (1, 2), config=config) == (False, None)
