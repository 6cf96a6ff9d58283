from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from .familia import Padre, Hijo
from .inscripcion import InscripcionComedor
from .baja import BajaComedor
from .solicitud import SolicitudPuntual
from .invitacion import InvitacionComedor
from .festivo import DiaFestivo
from .configuracion import ConfiguracionPrecios
from .log import Log
