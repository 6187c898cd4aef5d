"""Basic import tests to verify package structure."""


def test_import_sand_sim():
    """Verify main package imports."""
    import sand_sim
    assert sand_sim.__version__ == "0.1.0"


def test_import_model():
    from sand_sim import model
    assert hasattr(model, "SandSimulation")
    assert hasattr(model, "GridState")


def test_import_export():
    from sand_sim import export
    assert hasattr(export, "CSVWriter")
    assert hasattr(export, "Visualizer")
    assert hasattr(export, "Reporter")
