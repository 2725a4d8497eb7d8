"""
Empaquetado del resultado final: metadatos del frame + buffers de la malla.
"""
from ..models import RadarFrame, ResultMessage, WorkerResult
from .mesh_generator import GeneratedMesh


def package_result(frame: RadarFrame, mesh: GeneratedMesh) -> ResultMessage:
    """
    Arma el ResultMessage. Los buffers se mueven sin copia y quedan en solo
    lectura; el llamador no debe reutilizar `mesh` después.

    Raises:
        ValueError: vertices y colors con distinta cantidad de componentes.
    """
    for buf in (mesh.vertices, mesh.colors):
        buf.flags.writeable = False

    if mesh.vertices.size != mesh.colors.size:
        raise ValueError(
            f"Buffers desbalanceados: {mesh.vertices.size} componentes de vértice "
            f"vs {mesh.colors.size} de color"
        )

    result = WorkerResult(
        date=frame.date,
        longitude=frame.longitude,
        latitude=frame.latitude,
        vertices=mesh.vertices,
        colors=mesh.colors,
    )
    return ResultMessage(result=result)
