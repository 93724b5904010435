from argparse import ArgumentParser
import asyncio
import json
import logging

from . import (
    Platform,
    drive_certificates,
    drive_save_paths,
    security_token_environment_file_path,
)


def main(args=None):
    parser = ArgumentParser(
        description="List NPKI certificates stored on local and removable drives"
    )

    parser.add_argument(
        "-p",
        "--platform",
        choices=[p.name.lower() for p in Platform],
        help="Resolve the primary save path for this platform instead of the host's",
    )

    parser.add_argument(
        "--home", help="Home directory for the primary save path"
    )

    parser.add_argument(
        "--save-paths",
        action="store_true",
        help="Only print the save paths that would be searched",
    )

    parser.add_argument(
        "--token-config",
        action="store_true",
        help="Only print the path of the PKCS#11 security token configuration",
    )

    parser.add_argument("--json", action="store_true", help="Print JSON")

    parser.add_argument("-v", "--verbose", action="store_true")

    r = parser.parse_args(args=args)

    logging.basicConfig(level=logging.DEBUG if r.verbose else logging.INFO)
    platform = Platform.from_name(r.platform) if r.platform else None

    if r.token_config:
        print(security_token_environment_file_path(platform, r.home))
        return 0

    if r.save_paths:
        groups = asyncio.run(drive_save_paths(platform=platform, home=r.home))
        if r.json:
            print(
                json.dumps(
                    [
                        {
                            "device": group.device.device if group.device else None,
                            "paths": group.paths,
                        }
                        for group in groups
                    ],
                    indent=2,
                )
            )
        else:
            for group in groups:
                source = group.device.device if group.device else "primary"
                for path in group.paths:
                    print(f"{source}\t{path}")
        return 0

    certificates = asyncio.run(drive_certificates(platform=platform, home=r.home))
    if r.json:
        print(json.dumps([cert.as_dict() for cert in certificates], indent=2))
    else:
        for cert in certificates:
            print(f"{cert.issuer_id}\t{cert.distinguished_name}\t{cert.path}")

    if not certificates:
        logging.getLogger(__name__).info("No NPKI certificates found")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
