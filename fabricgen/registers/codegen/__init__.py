from .gen_regfile import RegisterFileGenerator, RegisterFileSpec, StoreSource, generate_register_file
from .gen_md import RegisterFileMdGenerator
