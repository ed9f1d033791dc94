import json

import click
from dotenv import load_dotenv

from .exceptions import StarLedgerError
from .signatures import (
    address_from_public_key,
    generate_keypair,
    public_key_from_private,
    sign_message,
    verify_message,
)


# Helper function for consistent error handling and output
def handle_call(ctx, func, success_message, *args, **kwargs):
    """
    Calls a ledger helper, handles errors, and prints output based on --json-output flag.
    """
    try:
        result = func(*args, **kwargs)
        if ctx.obj.get("JSON_OUTPUT"):
            click.echo(json.dumps({"status": "success", "result": result}, indent=2))
        else:
            click.echo(f"SUCCESS: {success_message}")
            if isinstance(result, (list, dict)):
                click.echo(json.dumps(result, indent=2))
            elif result is not None:
                click.echo(result)
        return result
    except StarLedgerError as e:
        if ctx.obj.get("JSON_OUTPUT"):
            click.echo(json.dumps({"status": "error", "message": str(e)}, indent=2))
        else:
            click.echo(f"ERROR: {str(e)}", err=True)
        ctx.exit(1)
    except (ValueError, TypeError) as e:
        if ctx.obj.get("JSON_OUTPUT"):
            click.echo(json.dumps({"status": "error", "message": "Invalid input.", "details": str(e)}, indent=2))
        else:
            click.echo(f"ERROR: Invalid input: {str(e)}", err=True)
        ctx.exit(1)
    except Exception as e:  # e.g. ecdsa.keys.MalformedPointError for a bad private key
        if ctx.obj.get("JSON_OUTPUT"):
            click.echo(json.dumps({"status": "error", "message": "An unexpected error occurred.", "details": str(e)}, indent=2))
        else:
            click.echo(f"UNEXPECTED ERROR: {str(e)}", err=True)
        ctx.exit(1)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--json-output", "-j", is_flag=True, help="Output results in JSON format.")
@click.pass_context
def cli(ctx, json_output):
    """Star registry command line tools: wallet keys, message signing and the API server."""
    load_dotenv()
    ctx.ensure_object(dict)
    ctx.obj["JSON_OUTPUT"] = json_output


def _new_wallet():
    private_hex, public_hex = generate_keypair()
    return {
        "address": address_from_public_key(public_hex),
        "private_key": private_hex,
        "public_key": public_hex,
    }


@cli.command("keygen")
@click.pass_context
def keygen(ctx):
    """
    Generate a new secp256k1 keypair and its wallet address.
    """
    handle_call(ctx, _new_wallet, "Wallet generated.")


@cli.command("address")
@click.argument("private_key")
@click.pass_context
def address(ctx, private_key):
    """
    Print the wallet address belonging to PRIVATE_KEY (hex).
    """
    handle_call(
        ctx,
        lambda: address_from_public_key(public_key_from_private(private_key)),
        "Address derived.",
    )


@cli.command("sign")
@click.argument("message")
@click.option("--private-key", envvar="STARLEDGER_PRIVATE_KEY", required=True, help="Hex private key.")
@click.pass_context
def sign(ctx, message, private_key):
    """
    Sign an ownership MESSAGE obtained from /requestValidation.

    Example:

        starledger-cli sign "<address>:1700000000:starRegistry" --private-key <hex>
    """
    handle_call(ctx, sign_message, "Message signed.", message, private_key)


@cli.command("verify")
@click.argument("message")
@click.argument("wallet_address")
@click.argument("signature")
@click.pass_context
def verify(ctx, message, wallet_address, signature):
    """
    Check that SIGNATURE over MESSAGE was produced by WALLET_ADDRESS.
    """
    valid = verify_message(message, wallet_address, signature)
    if ctx.obj.get("JSON_OUTPUT"):
        click.echo(json.dumps({"status": "success", "result": valid}, indent=2))
    else:
        click.echo("Signature is valid." if valid else "Signature is NOT valid.")
    if not valid:
        ctx.exit(1)


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to settings).")
@click.option("--port", default=None, type=int, help="Bind port (defaults to settings).")
def serve(host, port):
    """
    Run the star registry HTTP API.
    """
    from app import main

    main(host=host, port=port)
