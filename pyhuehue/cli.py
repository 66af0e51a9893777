"""
Command line interface to discover and control Hue lights.

This module uses click for the cli interface.  To see informational and help
message(s), you can run:
    huehue --help

Each of the Commands listed within help also have their own help
documentation with additional information, for example:
    huehue authorize --help
    huehue light --help

Bridge commands read the bridge address, device type and application key from
the HUEHUE_BRIDGE, HUEHUE_DEVICE_TYPE and HUEHUE_APPLICATION_KEY environment
variables, which `huehue authorize` writes to huehue.env.
"""
from __future__ import annotations

import logging
import pathlib
import uuid
from typing import Any, Callable

import click
import colorlog

from .bridge import Bridge
from .color import ColorXY, get_gamut, rgb_to_xy, xy_to_rgb
from .device import Device
from .discovery import discover_bridges
from .exceptions import PyHueException, UnauthorizedException
from .hue import Hue
from .light import Light
from .models import DeviceType

# -----------------------------------------------------------------------------
LOG = colorlog.getLogger("pyhuehue")
LOG.addHandler(logging.NullHandler())

ENV_FILE = pathlib.Path("huehue.env")
APPLICATION_NAME = "huehue"

# context for -h/--help usage with click
CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


# -----------------------------------------------------------------------------
def setup_logger(verbose: int) -> None:
    """Logger setup."""
    for handler in list(LOG.handlers):
        LOG.removeHandler(handler)
    handler = colorlog.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter('%(log_color)s[%(levelname)-8s] %(message)s')
    )
    LOG.addHandler(handler)
    if verbose == 0:
        LOG.setLevel(logging.WARNING)
    elif verbose == 1:
        LOG.setLevel(logging.INFO)
    elif verbose == 2:
        # include debug messages from pyhuehue, but not others
        LOG.setLevel(logging.DEBUG)
        logging.getLogger('urllib3.connectionpool').setLevel(logging.WARNING)
    else:
        # include all debug messages
        LOG.setLevel(logging.DEBUG)
        logging.getLogger().setLevel(logging.DEBUG)


def connect(address: str, device_type: str, application_key: str) -> Hue:
    """Create an authorized client from the command line options."""
    return Hue.connect(
        address, DeviceType.from_string(device_type), application_key
    )


def bridge_options(function: Callable[..., Any]) -> Callable[..., Any]:
    """Add the options identifying an authorized application."""
    function = click.option(
        '--application-key',
        envvar='HUEHUE_APPLICATION_KEY',
        required=True,
        help='Application key returned by "huehue authorize".',
    )(function)
    function = click.option(
        '--device-type',
        envvar='HUEHUE_DEVICE_TYPE',
        required=True,
        help='Device type the key was issued for, "app#device".',
    )(function)
    function = click.option(
        '--bridge',
        envvar='HUEHUE_BRIDGE',
        required=True,
        help='IPv4 address of the bridge.',
    )(function)
    return function


def print_bridge(index: int, bridge: Bridge) -> None:
    """Print a discovered bridge."""
    click.echo(f'> Bridge #{index}:')
    click.echo(f'\tIdentifier: {bridge.id}')
    click.echo(f'\tModel: {bridge.model.value}')
    click.echo(f'\tVersion: {bridge.version}')
    click.echo(f'\tAddress: {bridge.address}')
    click.echo(f'\tSupported: {bridge.supported}')


def print_device(device: Device) -> None:
    """Print a device and its services."""
    click.echo(f'> Device {device.name}:')
    click.echo(f'\tIdentifier: {device.id}')
    click.echo(f'\tModel: {device.product.model_id}')
    click.echo(f'\tManufacturer: {device.product.manufacturer_name}')
    click.echo(f'\tArchetype: {device.product.product_archetype}')
    click.echo(f'\tProduct: {device.product.product_name}')
    click.echo(f'\tSoftware version: {device.product.software_version}')
    click.echo(f'\tCertified: {device.product.certified}')
    for service in sorted(device.services, key=lambda s: (s.rtype, s.rid)):
        click.echo(f'\tService: rid={service.rid}, rtype={service.rtype}')


def print_light(light: Light) -> None:
    """Print a light and its state."""
    click.echo(f'> Light {light.name}:')
    click.echo(f'\tIdentifier: {light.id}')
    click.echo(f'\tOn: {light.on}')
    if light.brightness is not None:
        click.echo(f'\tBrightness: {light.brightness}')
    if (color := light.color) is not None:
        red, green, blue = color.gamut.red, color.gamut.green, color.gamut.blue
        click.echo(f'\tColor: {tuple(color.xy)} rgb{tuple(color.rgb)}')
        click.echo(
            f'\tGamut {color.gamut_type}: R={tuple(red)} '
            f'G={tuple(green)} B={tuple(blue)}'
        )
    if (temperature := light.temperature) is not None:
        if temperature.mirek is not None:
            schema = temperature.mirek_schema
            click.echo(
                f'\tTemperature: {temperature.mirek} (min: '
                f'{schema.mirek_minimum}, max: {schema.mirek_maximum})'
            )


# -----------------------------------------------------------------------------
@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    '-v',
    '--verbose',
    count=True,
    help='''Print log messages.  Use -v for informational messages, -vv to
    also enable debug messages from pyhuehue, and -vvv to enable debug
    messages from upstream libraries.''',
)
def cli(verbose: int) -> None:
    """Discover Hue bridges and control their lights."""
    setup_logger(verbose)


# -----------------------------------------------------------------------------
@cli.command(name='scan', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--timeout',
    default=5.0,
    show_default=True,
    help='Seconds to browse mDNS for bridges.',
)
def click_scan(timeout: float) -> None:
    """Discover bridges on the current network(s)."""
    click.echo(f'Scanning for bridges for {timeout:g} seconds.')
    bridges = discover_bridges(timeout)
    click.echo(f'{len(bridges)} bridge(s) found.')
    for index, bridge in enumerate(bridges, start=1):
        print_bridge(index, bridge)


# -----------------------------------------------------------------------------
@cli.command(name='authorize', context_settings=CONTEXT_SETTINGS)
@click.option('--address', required=True, help='IPv4 address of the bridge.')
@click.option(
    '--device',
    required=True,
    help='Name of this device, 1-19 letters, digits or underscores.',
)
def click_authorize(address: str, device: str) -> None:
    """Register with a bridge and store the application key.

    Press the round link button on the bridge before running this.
    """
    try:
        device_type = DeviceType(APPLICATION_NAME, device)
        click.echo(f'Attempting to authorize with {address}.')
        hue = Hue.connect(address, device_type)
        application_key = hue.authorize()
    except UnauthorizedException:
        LOG.error(
            'Link button not pressed. Press the button and re-run this.'
        )
        raise SystemExit(1)
    except PyHueException as exc:
        LOG.critical(exc)
        raise SystemExit(1)

    variables = (
        f"export HUEHUE_DEVICE_TYPE='{device_type}'\n"
        f"export HUEHUE_APPLICATION_KEY='{application_key}'\n"
        f"export HUEHUE_BRIDGE='{address}'\n"
    )
    try:
        ENV_FILE.write_text(variables, encoding='utf-8')
    except OSError:
        LOG.warning(
            'Failed to create %s, so printing the variables here. It is '
            'recommended to save these to a file and source it.',
            ENV_FILE,
        )
        click.echo(variables)
    else:
        click.echo(f'Application key written to {ENV_FILE}.')


# -----------------------------------------------------------------------------
@cli.command(name='devices', context_settings=CONTEXT_SETTINGS)
@bridge_options
def click_devices(bridge: str, device_type: str, application_key: str) -> None:
    """Print the devices registered with the bridge."""
    try:
        for device in connect(bridge, device_type, application_key).devices():
            print_device(device)
    except PyHueException as exc:
        LOG.critical(exc)
        raise SystemExit(1)


@cli.command(name='lights', context_settings=CONTEXT_SETTINGS)
@bridge_options
def click_lights(bridge: str, device_type: str, application_key: str) -> None:
    """Print the lights of the bridge."""
    try:
        for light in connect(bridge, device_type, application_key).lights():
            print_light(light)
    except PyHueException as exc:
        LOG.critical(exc)
        raise SystemExit(1)


# -----------------------------------------------------------------------------
@cli.group(name='light', context_settings=CONTEXT_SETTINGS)
@bridge_options
@click.option('--id', 'light_id', type=click.UUID, required=True)
@click.pass_context
def click_light(
    ctx: click.Context,
    bridge: str,
    device_type: str,
    application_key: str,
    light_id: uuid.UUID,
) -> None:
    """Change the state of a single light."""
    try:
        hue = connect(bridge, device_type, application_key)
        ctx.obj = hue.light(light_id)
    except PyHueException as exc:
        LOG.critical(exc)
        raise SystemExit(1)


def _light_action(action: Callable[[Light], Any]) -> None:
    light = click.get_current_context().obj
    try:
        action(light)
    except PyHueException as exc:
        LOG.critical(exc)
        raise SystemExit(1)
    print_light(light)


@click_light.command(name='switch', context_settings=CONTEXT_SETTINGS)
def click_light_switch() -> None:
    """Toggle the light on or off."""
    _light_action(lambda light: light.toggle())


@click_light.command(name='color', context_settings=CONTEXT_SETTINGS)
@click.argument('x', type=float)
@click.argument('y', type=float)
def click_light_color(x: float, y: float) -> None:
    # pylint: disable=invalid-name
    """Set the color as a CIE 1931 xy point."""
    _light_action(lambda light: light.set_color(ColorXY(x, y)))


@click_light.command(name='rgb', context_settings=CONTEXT_SETTINGS)
@click.argument('red', type=click.IntRange(0, 255))
@click.argument('green', type=click.IntRange(0, 255))
@click.argument('blue', type=click.IntRange(0, 255))
def click_light_rgb(red: int, green: int, blue: int) -> None:
    """Set the color from 8-bit sRGB channels."""
    _light_action(lambda light: light.set_color_rgb((red, green, blue)))


@click_light.command(name='dim', context_settings=CONTEXT_SETTINGS)
@click.argument('brightness', type=click.FloatRange(0, 100))
def click_light_dim(brightness: float) -> None:
    """Set the brightness in percent."""
    _light_action(lambda light: light.dim(brightness))


# -----------------------------------------------------------------------------
@cli.group(name='convert', context_settings=CONTEXT_SETTINGS)
def click_convert() -> None:
    """Convert colors without talking to a bridge."""


GAMUT_OPTION = click.option(
    '--gamut',
    'gamut_type',
    type=click.Choice(['A', 'B', 'C'], case_sensitive=False),
    default='C',
    show_default=True,
    help='Gamut class of the target light.',
)


@click_convert.command(name='rgb', context_settings=CONTEXT_SETTINGS)
@click.argument('red', type=click.IntRange(0, 255))
@click.argument('green', type=click.IntRange(0, 255))
@click.argument('blue', type=click.IntRange(0, 255))
@GAMUT_OPTION
def click_convert_rgb(
    red: int, green: int, blue: int, gamut_type: str
) -> None:
    """Print the xy point of an RGB color."""
    colorxy = rgb_to_xy((red, green, blue), get_gamut(gamut_type))
    click.echo(f'{colorxy.x:.4f} {colorxy.y:.4f}')


@click_convert.command(name='xy', context_settings=CONTEXT_SETTINGS)
@click.argument('x', type=float)
@click.argument('y', type=float)
@GAMUT_OPTION
def click_convert_xy(x: float, y: float, gamut_type: str) -> None:
    # pylint: disable=invalid-name
    """Print the RGB color of an xy point."""
    try:
        rgb = xy_to_rgb(ColorXY(x, y), get_gamut(gamut_type))
    except PyHueException as exc:
        raise click.BadParameter(str(exc)) from exc
    click.echo(f'{rgb.r} {rgb.g} {rgb.b}')


# -----------------------------------------------------------------------------
# Run the script
if __name__ == '__main__':
    # pylint: disable= no-value-for-parameter
    cli()
