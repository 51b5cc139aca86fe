import logging
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(__file__)))


import fabricgen


def workdir() -> str:
    return os.path.dirname(__file__)


def demo_output_folder() -> str:
    return os.path.join(workdir(), 'output')


def prepare_output_folder():
    os.makedirs(demo_output_folder(), exist_ok=True)
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')
