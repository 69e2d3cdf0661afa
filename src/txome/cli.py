########## LICENCE ##########
# txome
# Copyright (C) 2024 Genome Research Ltd
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#############################

import errno
from functools import wraps
import logging
import os
from typing import Optional

import click

from . import __version__
from .config import IndexConfig, load_config
from .constants import DEFAULT_SEED_SHAPE
from .errors import EmptyTranscriptome, InvalidAnnotation, InvalidConfig
from .index_cache import ReferenceIndex, load_or_generate, load_or_generate_transcriptome
from .splicer import write_transcriptome


existing_file = click.Path(exists=True, file_okay=True, dir_okay=False)
output_file = click.Path(file_okay=True, dir_okay=False, writable=True)


def set_logger(ctx: click.Context, param: click.Parameter, value: str) -> None:
    logging.basicConfig(level=logging._nameToLevel[value.upper()])


def log_option(f):
    @click.option(
        '--log',
        default='WARNING',
        type=click.Choice(list(logging._nameToLevel.keys()), case_sensitive=False),
        callback=set_logger,
        expose_value=False,
        is_eager=True,
        help="Logging level")
    @wraps(f)
    def wrapper(*args, **kwargs):
        return f(*args, **kwargs)

    return wrapper


def fatal_errors(f):
    """Log the errors that abort a build and exit with a non-zero status"""

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)

        except InvalidConfig as ex:
            logging.critical("Invalid configuration%s!" % (' ' + ex.args[0] if ex.args else ''))

        except (InvalidAnnotation, EmptyTranscriptome) as ex:
            logging.critical(ex.args[0])

        except OSError as ex:
            logging.critical(ex)

        raise SystemExit(1)

    return wrapper


def write_sam_headers(ref_index: ReferenceIndex, fp: str) -> None:
    with open(fp, 'w') as fh:
        fh.write(ref_index.generate_sam_headers())


def run_index(config: IndexConfig) -> ReferenceIndex:
    ref_index = (
        load_or_generate_transcriptome(
            config.reference_fp,
            config.annotation_fp,
            config.index_fp,
            shape=config.seed_shape) if config.mode.is_transcriptome else
        load_or_generate(
            config.reference_fp,
            config.index_fp,
            shape=config.seed_shape)
    )

    if config.sam_header_fp:
        write_sam_headers(ref_index, config.sam_header_fp)

    return ref_index


@click.group(invoke_without_command=True)
@click.option('-c', '--config', 'config_fp', type=existing_file, help="Configuration file path")
@log_option
@click.version_option(__version__)
@click.pass_context
def main(ctx: click.Context, config_fp: Optional[str]):
    if ctx.invoked_subcommand is None:
        if not config_fp:
            raise click.UsageError("Configuration required if no subcommand is specified!")

        _run_config(config_fp)
        ctx.exit(0)


@fatal_errors
def _run_config(config_fp: str) -> None:

    # Load configuration
    config = load_config(config_fp)

    # Check application version
    if config.app_version != __version__:
        logging.warning(
            "Application version in configuration differs (%s vs. %s)!" %
            (config.app_version, __version__))

    # Check input files
    for fp in config.input_file_paths:
        if not os.path.isfile(fp):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), fp)

    run_index(config)


@main.command()
@click.argument('ref_fasta_fp', type=existing_file, metavar='REF_FASTA')
@click.argument('index_fp', type=output_file, metavar='INDEX')
@click.option('--gtf', 'annot_fp', type=existing_file, help="Annotation GTF file path (transcriptome mode)")
@click.option('--shape', 'seed_shape', default=DEFAULT_SEED_SHAPE, show_default=True, help="Spaced seed shape")
@click.option('--sam-header', 'sam_header_fp', type=output_file, help="SAM header output file path")
@click.option('--write-config', 'config_fp', type=output_file, help="Write the configuration to a JSON file")
@log_option
@fatal_errors
def index(
    ref_fasta_fp: str,
    index_fp: str,
    annot_fp: Optional[str],
    seed_shape: str,
    sam_header_fp: Optional[str],
    config_fp: Optional[str]
) -> None:
    """
    Load a reference index, generating it if missing or outdated

    \b
    REF_FASTA is the reference genome FASTA file path
    INDEX is the index file path
    """

    config = IndexConfig(
        reference_fp=ref_fasta_fp,
        index_fp=index_fp,
        annotation_fp=annot_fp,
        sam_header_fp=sam_header_fp,
        seed_shape=seed_shape)

    if config_fp:
        config.write(config_fp)

    run_index(config)


@main.command()
@click.argument('ref_fasta_fp', type=existing_file, metavar='REF_FASTA')
@click.argument('annot_fp', type=existing_file, metavar='GTF')
@click.argument('output_fp', type=output_file, metavar='OUTPUT')
@log_option
@fatal_errors
def splice(ref_fasta_fp: str, annot_fp: str, output_fp: str) -> None:
    """
    Write the spliced transcript sequences to a FASTA file

    \b
    REF_FASTA is the reference genome FASTA file path
    GTF is the annotation file path
    OUTPUT is the transcript FASTA file path
    """

    write_transcriptome(ref_fasta_fp, annot_fp, output_fp)
