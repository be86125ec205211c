from sqlalchemy import (
    JSON, Boolean, Column, Date, DateTime, ForeignKey, Index, Integer,
    MetaData, String, Table, func,
)

metadata = MetaData()

roles = Table(
    "roles",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("nombre", String(50), nullable=False, unique=True),
    Column("descripcion", String(255)),
)

usuarios = Table(
    "usuarios",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("nombre", String(100), nullable=False),
    Column("apellido", String(100), nullable=False),
    Column("email", String(150), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("telefono", String(30)),
    Column("activo", Boolean, nullable=False, default=True),
    Column("rol_id", Integer, ForeignKey("roles.id"), nullable=False),
    Column("creado_en", DateTime(timezone=True), server_default=func.now()),
    Column("actualizado_en", DateTime(timezone=True), server_default=func.now()),
)

torneos = Table(
    "torneos",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("nombre", String(150), nullable=False),
    Column("disciplina", String(50), nullable=False),
    Column("estado", String(30), nullable=False, default="planificado"),
    Column("organizador_id", Integer, ForeignKey("usuarios.id"), nullable=False),
    Column("creado_en", DateTime(timezone=True), server_default=func.now()),
    Column("actualizado_en", DateTime(timezone=True), server_default=func.now()),
)

equipos = Table(
    "equipos",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("nombre", String(150), nullable=False),
    Column("color", String(30)),
    Column("representante", String(120)),
    Column("telefono_representante", String(30)),
    Column("torneo_id", Integer, ForeignKey("torneos.id", ondelete="CASCADE"), nullable=False),
    Column("creado_en", DateTime(timezone=True), server_default=func.now()),
    Column("actualizado_en", DateTime(timezone=True), server_default=func.now()),
)

# Team names are unique per tournament regardless of casing
Index(
    "uq_equipos_torneo_nombre",
    equipos.c.torneo_id,
    func.lower(equipos.c.nombre),
    unique=True,
)

jugadores = Table(
    "jugadores",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("nombre", String(100), nullable=False),
    Column("apellido", String(100), nullable=False),
    Column("fecha_nacimiento", Date),
    Column("nro_camiseta", Integer),
    Column("posicion", String(50)),
    Column("equipo_id", Integer, ForeignKey("equipos.id", ondelete="CASCADE"), nullable=False),
    Column("creado_en", DateTime(timezone=True), server_default=func.now()),
    Column("actualizado_en", DateTime(timezone=True), server_default=func.now()),
)

registro_actividad = Table(
    "registro_actividad",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("accion", String(100), nullable=False),
    Column("detalles", JSON),
    Column("usuario_id", Integer),
    Column("creado_en", DateTime(timezone=True), server_default=func.now()),
)
