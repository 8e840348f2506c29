"""
OctetField - Segmented IPv4 Address Input
Launcher Module
Command line front end shared by `python .` and the `octetfield` script.
It handles dependency checking, argument parsing, settings validation,
console address checks and application startup.
"""
import argparse
import os
import sys
import traceback
from pathlib import Path
from typing import Optional, List
VERSION = "1.0.0"
def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="OctetField - Segmented IPv4 Address Input",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python .                              # Start the demo form
  python . --check-deps                 # Check dependencies only
  python . --validate 192.168.001.010   # Print the canonical address
  python . --config settings.json       # Load widget settings
  python . --debug --log-dir ./logs     # Debug logging to a custom directory
        """
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"OctetField {VERSION}"
    )
    parser.add_argument(
        "--check-deps", "-c",
        action="store_true",
        help="Check dependencies and exit"
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force start application even if dependencies are missing"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        help="Custom directory for log files"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="JSON file with widget settings"
    )
    parser.add_argument(
        "--validate",
        metavar="ADDRESS",
        help="Validate an IPv4 address without starting the GUI"
    )
    return parser.parse_args(argv)
def diagnose_pyside6() -> bool:
    """Diagnose PySide6 installation issues."""
    print("\nDiagnosing PySide6 installation...")
    try:
        import PySide6
        print(f"   OK PySide6 package found at: {PySide6.__file__}")
        for component in ("QtCore", "QtGui", "QtWidgets"):
            try:
                __import__(f"PySide6.{component}")
                print(f"   OK {component} imported successfully")
            except ImportError as e:
                print(f"   ERROR {component} import failed: {e}")
                return False
        return True
    except ImportError:
        print("   ERROR PySide6 package not found")
        print(f"\nInstallation suggestions:")
        print(f"   1. Verify installation: {sys.executable} -m pip show PySide6")
        print(f"   2. Reinstall: {sys.executable} -m pip uninstall PySide6 && {sys.executable} -m pip install PySide6")
        return False
def check_dependencies() -> bool:
    """Check that PySide6 and its widget modules import."""
    print(f"Python version: {sys.version}")
    print(f"Python executable: {sys.executable}\n")
    try:
        import PySide6
        from PySide6 import QtCore, QtWidgets, QtGui  # noqa: F401
    except ImportError as e:
        print("ERROR PySide6: GUI framework - MISSING")
        print(f"   Import error: {e}")
        print("\nMissing required dependencies:")
        print("   - PySide6 (GUI framework)")
        diagnose_pyside6()
        print("\nTry installing with:")
        print("   python3 -m pip install --user PySide6")
        return False
    print(f"OK PySide6: GUI framework (version: {getattr(PySide6, '__version__', 'unknown')})")
    return True
def setup_environment():
    """Setup the application environment."""
    # Add current directory to Python path for module imports
    current_dir = Path(__file__).parent
    if str(current_dir) not in sys.path:
        sys.path.insert(0, str(current_dir))
    os.environ.setdefault('QT_ENABLE_HIGHDPI_SCALING', '1')
def load_configuration(config_path: Optional[str]):
    """Load and validate settings; returns None after printing any problems."""
    from config_validation import ConfigurationError, load_settings, validate_configuration
    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except ConfigurationError as e:
        print(f"ERROR {e}")
        return None
    issues = validate_configuration(settings)
    if issues:
        print("Invalid settings:")
        for issue in issues:
            print(f"   - {issue.field}: {issue.title}. {issue.message}")
        return None
    return settings
def validate_address(address: str) -> int:
    """Console mode: print the canonical form of ``address``."""
    from messages import INVALID_VALUE, get_message
    from octet_model import MalformedBulkAssignment, get_canonical_address, parse_address
    try:
        octets = parse_address(address)
    except MalformedBulkAssignment as e:
        print(get_message(INVALID_VALUE, value=address))
        print(f"   {e}")
        return 1
    print(get_canonical_address(octets))
    return 0
def main(argv: Optional[List[str]] = None):
    """Main entry point for OctetField."""
    args = None
    try:
        args = parse_arguments(argv)
        setup_environment()
        if args.validate is not None:
            return validate_address(args.validate)
        print("Checking dependencies...")
        deps_ok = check_dependencies()
        if args.check_deps:
            if deps_ok:
                print("\nAll dependencies are satisfied!")
                return 0
            else:
                print("\nSome dependencies are missing!")
                return 1
        if not args.force and not deps_ok:
            print("\nCannot start application due to missing dependencies.")
            print("Use --force to attempt startup anyway, or install missing packages.")
            return 1
        settings = load_configuration(args.config)
        if settings is None:
            return 1
        if args.debug:
            settings['log_level'] = 'DEBUG'
            print("Debug logging enabled\n")
        from main import main as run_main
        return run_main(settings, log_dir=args.log_dir)
    except KeyboardInterrupt:
        print("\n\nApplication interrupted by user")
        return 130
    except Exception as e:
        print(f"\nCritical error starting OctetField:")
        print(f"   {type(e).__name__}: {e}")
        if args is not None and args.debug:
            print(f"\nDebug traceback:")
            traceback.print_exc()
        else:
            print(f"\nRun with --debug for detailed error information")
        return 1
