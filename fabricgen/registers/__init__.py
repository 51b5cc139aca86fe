from .structure.types import Direction, RegisterDescriptor, SlaveDescriptor

from .codegen.gen_regfile import RegisterFileGenerator, RegisterFileSpec, StoreSource, generate_register_file
from .codegen.gen_md import RegisterFileMdGenerator
