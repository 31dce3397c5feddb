import sys
from pathlib import Path
import logging

from PyQt5 import QtWidgets

from .controller import AnnotationController
from .model import FrameStoreError, TermiteTrackerModel
from .view import TermiteTrackerWindow


# Runs the GUI from the directory holding settings.json, the video and the locations file
def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )
    log = logging.getLogger(__name__)
    app = QtWidgets.QApplication(sys.argv)
    try:
        model = TermiteTrackerModel.from_root(Path.cwd())
    except (FrameStoreError, ValueError) as exc:
        log.exception("Startup failed")
        QtWidgets.QMessageBox.critical(None, "Error", str(exc))
        sys.exit(1)
    controller = AnnotationController(model)
    controller.load_initial_frame()
    window = TermiteTrackerWindow(controller)
    window.show()
    sys.exit(app.exec_())
