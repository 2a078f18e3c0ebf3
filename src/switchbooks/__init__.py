# Import main lazily so importing the package does not pull in the CLI
def __getattr__(name):
    if name == "main":
        from switchbooks.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
