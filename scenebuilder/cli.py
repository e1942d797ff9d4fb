"""Click CLI commands for SceneBuilder."""

import json
import logging
import pathlib

import click

from .constants import (DEFAULT_COORDINATE_SCALE, DEFAULT_ELEVATION_FACTOR,
                        EXPORT_FORMATS, LAYER_TYPES)
from .errors import InvalidBounds, NotFound
from .export import download_filename, export_layer
from .framing import frame
from .layers import layers_from_payload
from .models import BoundsRegion
from .scene import SceneSession

logger = logging.getLogger(__name__)


def _load_payload(path: str) -> dict:
    try:
        with open(path, encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Cannot read payload {path}: {e}")


@click.group()
def cli():
    """SceneBuilder CLI for turning building footprints into 3D scenes."""
    pass


@cli.command('frame')
@click.argument('min_x', type=float)
@click.argument('min_z', type=float)
@click.argument('max_x', type=float)
@click.argument('max_z', type=float)
@click.option('--elevation-factor', '-e', default=DEFAULT_ELEVATION_FACTOR,
              help='Camera distance as a multiple of the larger span')
def frame_cmd(min_x: float, min_z: float, max_x: float, max_z: float,
              elevation_factor: float):
    """Print the camera frame for a bounds region."""
    bounds = BoundsRegion(min_x=min_x, min_z=min_z, max_x=max_x, max_z=max_z)
    try:
        camera = frame(bounds, elevation_factor)
    except (InvalidBounds, ValueError) as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps(camera.to_dict(), indent=2))


@cli.command()
@click.argument('payload', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', default='scene.glb', help='Output model path')
@click.option('--format', '-f', 'file_type', default='gltf',
              type=click.Choice(sorted(EXPORT_FORMATS)), help='Output format')
@click.option('--scale', '-s', default=DEFAULT_COORDINATE_SCALE,
              help='Footprint units → scene units')
@click.option('--elevation-factor', '-e', default=DEFAULT_ELEVATION_FACTOR,
              help='Camera distance as a multiple of the larger span')
def build(payload: str, output: str, file_type: str, scale: float,
          elevation_factor: float):
    """Extrude the buildings of a visualization PAYLOAD (JSON) into a model."""
    data = _load_payload(payload)

    try:
        with SceneSession(coordinate_scale=scale,
                          elevation_factor=elevation_factor) as session:
            solids = session.show_payload(data)
            blob = session.export(file_type)
            camera = session.camera
            rejected = session.rejected
    except ValueError as e:
        raise click.ClickException(str(e))

    pathlib.Path(output).write_bytes(blob)

    click.echo(f"\n{'='*50}")
    click.echo(f"Built {len(solids)} solids, {len(rejected)} footprints rejected")
    for index, error in rejected:
        click.echo(f"  [✗] #{index}: {error}")
    if camera is not None:
        click.echo(f"Camera position: {tuple(round(v, 3) for v in camera.position)}")
        click.echo(f"Camera target:   {tuple(round(v, 3) for v in camera.look_at)}")
    click.echo(f"Model: {output} ({len(blob)} bytes)")
    click.echo(f"{'='*50}")


@cli.command('export')
@click.argument('layer_type', type=click.Choice(LAYER_TYPES))
@click.argument('payload', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', '-f', 'file_type', default='stl',
              type=click.Choice(sorted(EXPORT_FORMATS)), help='Output format')
@click.option('--output', '-o', default=None, help='Output model path')
@click.option('--scale', '-s', default=DEFAULT_COORDINATE_SCALE,
              help='Footprint units → scene units')
def export_cmd(layer_type: str, payload: str, file_type: str,
               output: str | None, scale: float):
    """Export one layer of a visualization PAYLOAD (JSON) as a model file."""
    data = _load_payload(payload)
    try:
        layers = layers_from_payload(data)
        if layer_type not in layers:
            raise NotFound(f"Payload has no {layer_type} layer")
        blob = export_layer(layers[layer_type], file_type, scale)
    except (NotFound, ValueError) as e:
        raise click.ClickException(str(e))

    output = output or download_filename(layer_type, file_type)
    pathlib.Path(output).write_bytes(blob)
    click.echo(f"Wrote {layer_type} model: {output} ({len(blob)} bytes)")


@cli.command()
@click.option('--host', default='127.0.0.1', help='Bind address')
@click.option('--port', default=8000, help='Bind port')
def serve(host: str, port: int):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("backend.app:app", host=host, port=port)
